"""Application container wiring the gateway to the stores."""

import logging
from typing import Any, Dict, Optional

from .client import ResearchClient
from .config import get_server, get_timeout, get_user_id, load_config
from .store import DashboardStore, ProjectStore

logger = logging.getLogger(__name__)


class App:
    """Owns one client and one instance of each store.

    Construct it at startup and pass it to whatever needs the stores; call
    ``close`` (or use it as a context manager) on shutdown.
    """

    def __init__(self, client: ResearchClient, user_id: int = 1):
        self.client = client
        self.projects = ProjectStore(client)
        self.dashboard = DashboardStore(client, user_id=user_id)

    @classmethod
    def from_config(
        cls,
        server: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[Dict[str, Any]] = None,
    ) -> "App":
        """Build an App from the config file, environment and explicit overrides."""
        if config is None:
            config = load_config()
        client = ResearchClient(
            server=server or get_server(config),
            timeout=get_timeout(config) if timeout is None else (timeout or None),
        )
        logger.debug("Using API server %s", client.base_url)
        return cls(client, user_id=get_user_id(config))

    def close(self) -> None:
        self.projects.close()
        self.dashboard.close()

    def __enter__(self) -> "App":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
