from .dashboard import DashboardState, DashboardStore
from .projects import ProjectState, ProjectStore, filter_projects

__all__ = [
    "DashboardState",
    "DashboardStore",
    "ProjectState",
    "ProjectStore",
    "filter_projects",
]
