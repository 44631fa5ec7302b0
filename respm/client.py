"""HTTP client for the research project API."""

import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

import pydantic
import requests

from .config import get_server, get_timeout
from .exceptions import RequestError, TransportError
from .models import (
    DashboardStats,
    Project,
    ProjectDraft,
    StatusHistory,
    UserSummary,
)
from .status import parse_project_status

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

# Sentinel: read timeout from config
_UNSET: Any = object()


class ResearchClient:
    """Client for the research project API.

    The only component that performs network I/O. Every method returns parsed
    JSON (or models built from it) and raises ``RequestError`` or
    ``TransportError`` on failure.
    """

    def __init__(self, server: Optional[str] = None, timeout: Any = _UNSET):
        self.server = (server or get_server()).rstrip("/")
        self.timeout = get_timeout() if timeout is _UNSET else timeout

    @property
    def base_url(self) -> str:
        return f"{self.server}/api"

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Accept": "application/json"}

    def request(self, method: str, path: str, data: Any = None) -> Any:
        """Make HTTP request to API and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = requests.request(
                method, url, json=data, headers=self._headers(), timeout=self.timeout
            )
        except requests.exceptions.ConnectionError as e:
            logger.warning("%s %s failed: cannot connect", method, url)
            raise TransportError(f"Failed to connect to server: {self.server}", e)
        except requests.exceptions.Timeout as e:
            logger.warning("%s %s failed: timeout", method, url)
            raise TransportError("Request timeout", e)
        except requests.exceptions.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"Request failed: {e}", e)

        if not 200 <= response.status_code < 300:
            message = _error_message(response)
            logger.warning(
                "%s %s returned %s: %s", method, url, response.status_code, message
            )
            raise RequestError(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Malformed JSON in response from {url}", e)

    def _get_model(self, model: Type[ModelT], path: str) -> ModelT:
        return _parse(lambda: model.model_validate(self.request("GET", path)))

    def _get_list(self, model: Type[ModelT], path: str) -> List[ModelT]:
        def build():
            result = self.request("GET", path)
            if result is None:
                return []
            if not isinstance(result, list):
                raise TransportError(f"Expected a list from {path}")
            return [model.model_validate(item) for item in result]

        return _parse(build)

    # ============================================================
    # Projects
    # ============================================================

    def list_projects(self) -> List[Project]:
        """List all projects."""
        return self._get_list(Project, "/projects")

    def get_project(self, project_id: int) -> Project:
        """Get a specific project."""
        return self._get_model(Project, f"/projects/{project_id}")

    def create_project(self, draft: ProjectDraft) -> Project:
        """Create a project from a draft and return the stored entity."""
        return _parse(
            lambda: Project.model_validate(
                self.request("POST", "/projects", draft.to_payload())
            )
        )

    def update_project(self, project: Project) -> Project:
        """Replace a project with the given fields."""
        return _parse(
            lambda: Project.model_validate(
                self.request("PUT", f"/projects/{project.id}", project.to_payload())
            )
        )

    def update_project_status(self, project_id: int, status) -> Project:
        """Change only the status of a project."""
        status = parse_project_status(status)
        payload = {"status": getattr(status, "value", status)}
        return _parse(
            lambda: Project.model_validate(
                self.request("PUT", f"/projects/{project_id}", payload)
            )
        )

    def delete_project(self, project_id: int) -> None:
        """Delete a project."""
        self.request("DELETE", f"/projects/{project_id}")

    def get_status_history(self, project_id: int) -> List[StatusHistory]:
        """List the status transitions of a project."""
        return self._get_list(StatusHistory, f"/projects/{project_id}/status-history")

    def list_projects_by_status(self, status) -> List[Project]:
        status = parse_project_status(status)
        value = getattr(status, "value", status)
        return self._get_list(Project, f"/projects/status/{value}")

    def list_projects_by_user(self, user_id: int) -> List[Project]:
        return self._get_list(Project, f"/projects/user/{user_id}")

    def list_upcoming_deadlines(self) -> List[Project]:
        """Projects whose deadline falls within the backend's warning window."""
        return self._get_list(Project, "/projects/deadlines/upcoming")

    def list_overdue_projects(self) -> List[Project]:
        return self._get_list(Project, "/projects/deadlines/overdue")

    # ============================================================
    # Dashboard
    # ============================================================

    def get_dashboard_stats(self) -> DashboardStats:
        return self._get_model(DashboardStats, "/dashboard")

    def get_user_summary(self, user_id: int) -> UserSummary:
        return self._get_model(UserSummary, f"/dashboard/user-summary/{user_id}")

    # ============================================================
    # Reviews and users (passed through as plain JSON)
    # ============================================================

    def list_reviews(self) -> List[Dict[str, Any]]:
        result = self.request("GET", "/reviews")
        return result or []

    def get_review(self, review_id: int) -> Dict[str, Any]:
        return self.request("GET", f"/reviews/{review_id}") or {}

    def update_review(self, review_id: int, review: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("PUT", f"/reviews/{review_id}", review) or {}

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Check credentials against the backend. No session is created."""
        return (
            self.request(
                "POST", "/users/login", {"username": username, "password": password}
            )
            or {}
        )


def _error_message(response) -> str:
    """Extract a readable message from an error response."""
    try:
        error = response.json()
    except ValueError:
        return response.text or response.reason or "Unknown error"
    if isinstance(error, dict):
        message = error.get("message") or error.get("detail") or error.get("error")
        if message:
            return str(message)
    return str(error) if error else (response.reason or "Unknown error")


def _parse(build: Callable[[], ModelT]) -> ModelT:
    """Run build, reporting a payload that does not fit the models as transport failure."""
    try:
        return build()
    except pydantic.ValidationError as e:
        logger.warning("Malformed response payload: %s", e)
        raise TransportError("Malformed response from server", e)
