"""Output formatting for respm commands."""

import json
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

import click
import yaml

from .models import DashboardStats, Project, StatusHistory, UserSummary
from .status import deadline_color, status_color

# Semantic color -> terminal color
TERMINAL_COLORS = {
    "success": "green",
    "warning": "yellow",
    "info": "blue",
    "error": "red",
    "default": None,
}

MAX_TITLE_WIDTH = 40


def _text(value: Any) -> str:
    if value is None:
        return "-"
    return str(getattr(value, "value", value))


def colorize(text: str, semantic_color: str) -> str:
    fg = TERMINAL_COLORS.get(semantic_color)
    return click.style(text, fg=fg) if fg else text


def format_table(
    headers: List[str],
    rows: List[List[str]],
    colors: Optional[Dict[int, Callable[[str], str]]] = None,
    empty_message: str = "No resources found.",
) -> str:
    """Format data as a table.

    ``colors`` maps a column index to a function returning the semantic color
    of a cell; widths are computed on the plain text.
    """
    if not rows:
        return empty_message

    colors = colors or {}
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["   ".join(h.upper().ljust(widths[i]) for i, h in enumerate(headers))]
    for row in rows:
        cells = []
        for i, cell in enumerate(row):
            padded = str(cell).ljust(widths[i])
            if i in colors:
                padded = colorize(padded, colors[i](str(cell)))
            cells.append(padded)
        lines.append("   ".join(cells).rstrip())
    return "\n".join(lines)


def format_age(timestamp: Optional[str]) -> str:
    """Format an ISO timestamp as age (e.g., 5m, 2h, 3d)."""
    if not timestamp:
        return "Unknown"
    try:
        value = datetime.fromisoformat(str(timestamp).replace("Z", "+00:00"))
    except ValueError:
        return "Unknown"
    now = datetime.now(value.tzinfo) if value.tzinfo else datetime.now()
    seconds = int((now - value).total_seconds())
    if seconds < 0:
        seconds = 0
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def _truncate(text: str, width: int = MAX_TITLE_WIDTH) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


def format_project_list(projects: Sequence[Project], wide: bool = False) -> str:
    """Format projects as a table."""
    headers = ["id", "title", "status", "deadline", "deadline status"]
    if wide:
        headers += ["owner", "start", "end", "age"]

    rows = []
    for project in projects:
        row = [
            str(project.id),
            _truncate(project.title),
            _text(project.status),
            _text(project.deadline),
            _text(project.deadline_status),
        ]
        if wide:
            row += [
                project.owner.username if project.owner else "-",
                _text(project.start_date),
                _text(project.end_date),
                format_age(project.updated_at or project.created_at),
            ]
        rows.append(row)

    return format_table(
        headers,
        rows,
        colors={2: status_color, 4: deadline_color},
        empty_message="No projects found.",
    )


def format_resource_yaml(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


def format_resource_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_status_history(history: Sequence[StatusHistory]) -> str:
    rows = [
        [
            _text(entry.changed_at),
            _text(entry.old_status),
            _text(entry.new_status),
            entry.changed_by.display_name if entry.changed_by else "-",
        ]
        for entry in history
    ]
    return format_table(
        ["changed at", "from", "to", "changed by"],
        rows,
        colors={2: status_color},
        empty_message="No status changes recorded.",
    )


def format_describe(project: Project, history: Optional[Sequence[StatusHistory]] = None) -> str:
    """Format a project for detailed display."""
    lines = [
        f"ID:           {project.id}",
        f"Title:        {project.title}",
        f"Status:       {colorize(_text(project.status), status_color(project.status))}",
        f"Start Date:   {_text(project.start_date)}",
        f"End Date:     {_text(project.end_date)}",
        f"Deadline:     {_text(project.deadline)} "
        f"({colorize(_text(project.deadline_status), deadline_color(project.deadline_status))})",
    ]
    if project.owner:
        lines.append(f"Owner:        {project.owner.display_name} ({project.owner.username})")
    if project.created_at:
        lines.append(f"Created:      {project.created_at}")
    if project.updated_at:
        lines.append(f"Updated:      {project.updated_at}")
    lines.append(f"Reminder:     {'sent' if project.reminder_sent else 'not sent'}")

    lines.append("")
    lines.append("Description:")
    for line in (project.description or "-").splitlines() or ["-"]:
        lines.append(f"  {line}")

    if history is not None:
        lines.append("")
        lines.append("Status History:")
        for line in format_status_history(history).splitlines():
            lines.append(f"  {line}")

    return "\n".join(lines)


def format_dashboard(stats: DashboardStats, summary: Optional[UserSummary] = None) -> str:
    lines = [
        f"Total Users:      {stats.total_users}",
        f"Active Projects:  {stats.active_projects}",
        f"Pending Reviews:  {stats.pending_reviews}",
    ]
    if stats.total_projects is not None:
        lines.append(f"Total Projects:   {stats.total_projects}")

    if summary is not None:
        lines.append("")
        name = summary.user.display_name if summary.user else "Unknown user"
        lines.append(f"User:             {name}")
        lines.append(f"  Active projects: {summary.project_count}")
        lines.append(f"  Reviews:         {summary.review_count}")

    lines.append("")
    lines.append("Recent Status Changes:")
    change_rows = [
        [
            _truncate(change.project_title),
            _text(change.old_status),
            _text(change.new_status),
            _text(change.changed_at),
            _text(change.changed_by),
        ]
        for change in stats.recent_status_changes
    ]
    table = format_table(
        ["project", "from", "to", "changed at", "by"],
        change_rows,
        colors={2: status_color},
        empty_message="No recent status changes.",
    )
    lines.extend(f"  {line}" for line in table.splitlines())

    lines.append("")
    lines.append("Upcoming Deadlines:")
    deadline_rows = [
        [
            _truncate(item.project_title),
            _text(item.deadline),
            str(item.days_until_deadline),
            _text(item.status),
        ]
        for item in stats.upcoming_deadlines
    ]
    table = format_table(
        ["project", "deadline", "days left", "status"],
        deadline_rows,
        colors={3: deadline_color},
        empty_message="No upcoming deadlines.",
    )
    lines.extend(f"  {line}" for line in table.splitlines())

    return "\n".join(lines)
