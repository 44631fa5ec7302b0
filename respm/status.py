"""Project status and deadline status values and their display colors.

This is the only place that decides how a status is presented. Both color
functions are total: any value outside the known enumerations, including
statuses a newer backend may introduce, maps to ``DEFAULT_COLOR``.
"""

import enum
from typing import Optional, Union

ALL = "ALL"

DEFAULT_COLOR = "default"


class ProjectStatus(str, enum.Enum):
    PENDING = "PENDING"  # Created, work not started
    IN_PROGRESS = "IN_PROGRESS"  # Actively worked on
    COMPLETED = "COMPLETED"  # Finished
    ON_HOLD = "ON_HOLD"  # Paused
    CANCELLED = "CANCELLED"  # Abandoned


class DeadlineStatus(str, enum.Enum):
    NO_DEADLINE = "NO_DEADLINE"
    ON_TRACK = "ON_TRACK"
    APPROACHING = "APPROACHING"  # Deadline within the backend's warning window
    OVERDUE = "OVERDUE"


class LoadPhase(str, enum.Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    READY = "READY"
    FAILED = "FAILED"


STATUS_COLORS = {
    ProjectStatus.PENDING: "warning",
    ProjectStatus.IN_PROGRESS: "info",
    ProjectStatus.COMPLETED: "success",
    ProjectStatus.ON_HOLD: "warning",
    ProjectStatus.CANCELLED: "error",
}

DEADLINE_COLORS = {
    DeadlineStatus.ON_TRACK: "success",
    DeadlineStatus.APPROACHING: "warning",
    DeadlineStatus.OVERDUE: "error",
    DeadlineStatus.NO_DEADLINE: DEFAULT_COLOR,
}


def parse_project_status(value: Optional[str]) -> Union[ProjectStatus, str, None]:
    """Return the matching ProjectStatus, or the raw value if it is unknown."""
    if value is None or isinstance(value, ProjectStatus):
        return value
    try:
        return ProjectStatus(str(value).upper())
    except ValueError:
        return str(value)


def parse_deadline_status(value: Optional[str]) -> Union[DeadlineStatus, str, None]:
    """Return the matching DeadlineStatus, or the raw value if it is unknown."""
    if value is None or isinstance(value, DeadlineStatus):
        return value
    try:
        return DeadlineStatus(str(value).upper())
    except ValueError:
        return str(value)


def is_valid_filter(value) -> bool:
    """Check whether value can be used as a project store status filter."""
    return value == ALL or isinstance(parse_project_status(value), ProjectStatus)


def status_color(status) -> str:
    """Map a project status to a semantic display color."""
    return STATUS_COLORS.get(parse_project_status(status), DEFAULT_COLOR)


def deadline_color(status) -> str:
    """Map a deadline status to a semantic display color."""
    return DEADLINE_COLORS.get(parse_deadline_status(status), DEFAULT_COLOR)
