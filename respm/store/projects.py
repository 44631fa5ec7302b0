"""Project store: the client-side copy of the project list."""

import dataclasses
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from ..exceptions import RespmError
from ..models import Project, ProjectDraft
from ..status import ALL, LoadPhase, ProjectStatus, is_valid_filter, parse_project_status
from .base import BaseStore

StatusFilter = Union[ProjectStatus, str]


@dataclass(frozen=True)
class ProjectState:
    items: Tuple[Project, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None
    status_filter: StatusFilter = ALL
    search_term: str = ""
    phase: LoadPhase = LoadPhase.IDLE


def filter_projects(
    items: Iterable[Project], status_filter: StatusFilter = ALL, search_term: str = ""
) -> List[Project]:
    """Projects matching the status filter and the search term.

    The search is a case-insensitive substring match on the title or the
    description; an empty term matches everything.
    """
    term = (search_term or "").lower()
    return [
        project
        for project in items
        if (status_filter == ALL or project.status == status_filter)
        and (term in project.title.lower() or term in project.description.lower())
    ]


def _unique(projects: Iterable[Project]) -> Tuple[Project, ...]:
    """One entry per id; a later duplicate replaces the earlier one in place."""
    by_id = {}
    for project in projects:
        by_id[project.id] = project
    return tuple(by_id.values())


def _upsert(items: Tuple[Project, ...], project: Project) -> Tuple[Project, ...]:
    if any(item.id == project.id for item in items):
        return _replace(items, project)
    return items + (project,)


def _replace(items: Tuple[Project, ...], project: Project) -> Tuple[Project, ...]:
    return tuple(project if item.id == project.id else item for item in items)


class ProjectStore(BaseStore[ProjectState]):
    """Holds the project list and the list view's filter and search inputs.

    Commands never raise on API failures: they record a readable message in
    ``state.error`` and return ``None`` (``False`` for ``delete``). On a failed
    ``fetch_all`` the previously fetched items are kept.
    """

    name = "projects"

    def _initial_state(self) -> ProjectState:
        return ProjectState()

    # ============================================================
    # Queries
    # ============================================================

    @property
    def items(self) -> List[Project]:
        return list(self.state.items)

    def get(self, project_id: int) -> Optional[Project]:
        for project in self.state.items:
            if project.id == project_id:
                return project
        return None

    def filtered_projects(self) -> List[Project]:
        """Derived view, recomputed on every call from the current snapshot."""
        state = self.state
        return filter_projects(state.items, state.status_filter, state.search_term)

    # ============================================================
    # Synchronous commands
    # ============================================================

    def set_status_filter(self, status_filter: StatusFilter) -> None:
        if isinstance(status_filter, str) and status_filter.upper() == ALL:
            value = ALL
        elif is_valid_filter(status_filter):
            value = parse_project_status(status_filter)
        else:
            raise ValueError(
                f"Invalid status filter: {status_filter}. Valid values: "
                f"{ALL}, {', '.join(s.value for s in ProjectStatus)}"
            )
        self._set(lambda s: dataclasses.replace(s, status_filter=value))

    def set_search_term(self, term: Optional[str]) -> None:
        self._set(lambda s: dataclasses.replace(s, search_term=term or ""))

    # ============================================================
    # Network commands
    # ============================================================

    def fetch_all(self) -> Optional[List[Project]]:
        """Replace the item list with the server's.

        Returns the fetched projects, or the items the store holds when a
        newer command superseded this fetch and its response was discarded.
        """
        token = self._begin()
        try:
            projects = self._client.list_projects()
        except RespmError as e:
            self._fail(token, e, "Failed to fetch projects")
            return None
        applied = self._succeed(
            token, lambda s: dataclasses.replace(s, items=_unique(projects)), read=True
        )
        if not applied:
            return self.items
        return projects

    def fetch_by_id(self, project_id: int) -> Optional[Project]:
        """Fetch one project and insert or refresh it in the list."""
        token = self._begin()
        try:
            project = self._client.get_project(project_id)
        except RespmError as e:
            self._fail(token, e, "Failed to fetch project")
            return None
        self._succeed(
            token,
            lambda s: dataclasses.replace(s, items=_upsert(s.items, project)),
            read=True,
        )
        return project

    def create(self, draft: ProjectDraft) -> Optional[Project]:
        token = self._begin()
        try:
            project = self._client.create_project(draft)
        except RespmError as e:
            self._fail(token, e, "Failed to create project")
            return None
        self._succeed(
            token, lambda s: dataclasses.replace(s, items=_upsert(s.items, project))
        )
        return project

    def update(self, project: Project) -> Optional[Project]:
        """Send the full project; the stored entry becomes the server's response."""
        token = self._begin()
        try:
            updated = self._client.update_project(project)
        except RespmError as e:
            self._fail(token, e, "Failed to update project")
            return None
        self._succeed(
            token, lambda s: dataclasses.replace(s, items=_replace(s.items, updated))
        )
        return updated

    def update_status(self, project_id: int, status: StatusFilter) -> Optional[Project]:
        """Change a project's status.

        The backend records the status history entry and may reclassify the
        deadline; the returned project replaces the stored one as a whole.
        """
        token = self._begin()
        try:
            updated = self._client.update_project_status(project_id, status)
        except RespmError as e:
            self._fail(token, e, "Failed to update project status")
            return None
        self._succeed(
            token, lambda s: dataclasses.replace(s, items=_replace(s.items, updated))
        )
        return updated

    def delete(self, project_id: int) -> bool:
        token = self._begin()
        try:
            self._client.delete_project(project_id)
        except RespmError as e:
            self._fail(token, e, "Failed to delete project")
            return False
        self._succeed(
            token,
            lambda s: dataclasses.replace(
                s, items=tuple(p for p in s.items if p.id != project_id)
            ),
        )
        return True
