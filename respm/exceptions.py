"""Error types raised by the respm gateway and forms."""

from typing import Dict, Optional


class RespmError(Exception):
    """Base class for every error respm raises on purpose."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(RespmError):
    """The request never produced a usable response.

    Raised for unreachable servers, timeouts and bodies that are not valid
    JSON. The original exception is kept on ``cause``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class RequestError(RespmError):
    """API error with status code and message."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        return f"HTTP error {self.status_code}: {self.message}"


class ValidationError(RespmError):
    """Client-side form validation failed; nothing was sent to the server."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        details = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Invalid input - {details}")
