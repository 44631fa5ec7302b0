"""Dashboard store: aggregate statistics plus one user's summary."""

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_USER_ID
from ..exceptions import RespmError
from ..models import DashboardStats, UserSummary
from ..status import LoadPhase
from .base import BaseStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    stats: Optional[DashboardStats] = None
    user_summary: Optional[UserSummary] = None
    is_loading: bool = False
    error: Optional[str] = None
    phase: LoadPhase = LoadPhase.IDLE


class DashboardStore(BaseStore[DashboardState]):
    name = "dashboard"

    def __init__(self, client, user_id: int = DEFAULT_USER_ID):
        super().__init__(client)
        self.user_id = user_id

    def _initial_state(self) -> DashboardState:
        return DashboardState()

    def fetch_dashboard_data(self) -> bool:
        """Fetch stats and the user summary concurrently.

        Both results are stored together; if either request fails nothing is
        stored and the error is recorded.
        """
        token = self._begin()
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="dashboard") as pool:
            stats_future = pool.submit(self._client.get_dashboard_stats)
            summary_future = pool.submit(self._client.get_user_summary, self.user_id)
            try:
                stats = stats_future.result()
                summary = summary_future.result()
            except RespmError as e:
                self._fail(token, e, "Failed to fetch dashboard data")
                return False

        logger.debug(
            "dashboard: %d status changes, %d upcoming deadlines",
            len(stats.recent_status_changes),
            len(stats.upcoming_deadlines),
        )
        return self._succeed(
            token,
            lambda s: dataclasses.replace(s, stats=stats, user_summary=summary),
            read=True,
        )
