"""
Data models for the research project API.

The backend speaks camelCase JSON; models accept either the camelCase alias
or the snake_case field name and dump back to camelCase with ``to_payload``.
"""

from datetime import date
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .status import (
    DeadlineStatus,
    ProjectStatus,
    parse_deadline_status,
    parse_project_status,
)


class ApiModel(BaseModel):
    """Base model for everything exchanged with the backend."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class User(ApiModel):
    """User embedded by value in projects and history entries."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.username


# ============================================================
# Deadline tracking
# ============================================================


class NoDeadline(BaseModel):
    """The project has no deadline; its deadline status is NO_DEADLINE."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"

    @property
    def due(self) -> None:
        return None

    @property
    def status(self) -> DeadlineStatus:
        return DeadlineStatus.NO_DEADLINE


class TrackedDeadline(BaseModel):
    """The project has a deadline, classified by the backend."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tracked"] = "tracked"
    due: date
    # None when the backend has not classified the deadline yet
    status: Union[DeadlineStatus, str, None] = None

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value):
        status = parse_deadline_status(value)
        # A dated deadline can never be NO_DEADLINE
        if status == DeadlineStatus.NO_DEADLINE:
            return None
        return status


DeadlineTracking = Union[NoDeadline, TrackedDeadline]


# ============================================================
# Projects
# ============================================================


class Project(ApiModel):
    """A research project as returned by the backend."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    description: str = ""
    status: Union[ProjectStatus, str] = ProjectStatus.PENDING
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    owner: Optional[User] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    reminder_sent: bool = False
    tracking: DeadlineTracking = Field(
        default_factory=NoDeadline, discriminator="kind"
    )

    @model_validator(mode="before")
    @classmethod
    def _fold_deadline(cls, data):
        """Turn the wire-level deadline/deadlineStatus pair into ``tracking``."""
        if not isinstance(data, dict) or "tracking" in data:
            return data
        data = dict(data)
        due = data.pop("deadline", None)
        status = data.pop("deadlineStatus", data.pop("deadline_status", None))
        if due:
            data["tracking"] = {"kind": "tracked", "due": due, "status": status}
        else:
            data["tracking"] = {"kind": "none"}
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value):
        return parse_project_status(value)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def deadline(self) -> Optional[date]:
        return self.tracking.due

    @property
    def deadline_status(self) -> Union[DeadlineStatus, str, None]:
        return self.tracking.status

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True, exclude={"tracking"})
        due = self.deadline
        payload["deadline"] = due.isoformat() if due else None
        status = self.deadline_status
        payload["deadlineStatus"] = getattr(status, "value", status)
        return payload


class ProjectDraft(ApiModel):
    """Fields the client sends to create a project."""

    title: str = Field(..., min_length=1)
    description: str = ""
    status: ProjectStatus = ProjectStatus.PENDING
    start_date: date
    end_date: date
    deadline: Optional[date] = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("status", mode="before")
    @classmethod
    def _upper_status(cls, value):
        return value.upper() if isinstance(value, str) else value

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        if payload.get("deadline") is None:
            payload.pop("deadline", None)
        return payload


class StatusHistory(ApiModel):
    """One status transition, written by the backend."""

    id: int
    project_id: Optional[int] = None
    old_status: Union[ProjectStatus, str, None] = None
    new_status: Union[ProjectStatus, str, None] = None
    changed_at: Optional[str] = None
    changed_by: Optional[User] = None

    @field_validator("old_status", "new_status", mode="before")
    @classmethod
    def _known_status(cls, value):
        return parse_project_status(value)


# ============================================================
# Dashboard
# ============================================================


class StatusChange(ApiModel):
    project_id: int
    project_title: str = ""
    old_status: Union[ProjectStatus, str, None] = None
    new_status: Union[ProjectStatus, str, None] = None
    changed_at: Optional[str] = None
    changed_by: Optional[str] = None

    @field_validator("old_status", "new_status", mode="before")
    @classmethod
    def _known_status(cls, value):
        return parse_project_status(value)


class UpcomingDeadline(ApiModel):
    project_id: int
    project_title: str = ""
    deadline: Optional[date] = None
    days_until_deadline: int = 0
    status: Union[DeadlineStatus, str, None] = None

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value):
        return parse_deadline_status(value)


class DashboardStats(ApiModel):
    """Aggregate numbers shown on the dashboard."""

    total_users: int = 0
    active_projects: int = 0
    pending_reviews: int = 0
    total_projects: Optional[int] = None
    recent_status_changes: List[StatusChange] = Field(default_factory=list)
    upcoming_deadlines: List[UpcomingDeadline] = Field(default_factory=list)

    @field_validator("recent_status_changes", "upcoming_deadlines", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return [] if value is None else value


class UserSummary(ApiModel):
    user: Optional[User] = None
    project_count: int = 0
    review_count: int = 0
    total_projects: Optional[int] = None
