"""Edit and set-status commands - change existing projects."""

from typing import Optional

import click

from ..app import App
from ..exceptions import ValidationError
from ..forms import apply_edits
from ..status import ProjectStatus


@click.command("edit")
@click.argument("project_id", type=int)
@click.option("--title", help="New title")
@click.option("--description", help="New description")
@click.option("--status", help="New status")
@click.option("--start-date", help="New start date (YYYY-MM-DD)")
@click.option("--end-date", help="New end date (YYYY-MM-DD)")
@click.option("--deadline", help="New deadline (YYYY-MM-DD), or 'none' to clear it")
@click.pass_context
def edit_cmd(
    ctx: click.Context,
    project_id: int,
    title: Optional[str],
    description: Optional[str],
    status: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    deadline: Optional[str],
):
    """Edit fields of a project.

    The project is fetched, edited locally, validated and sent back in full.
    The stored copy is replaced with what the server returns.

    \b
    Examples:
      respm edit 1 --title "New title"
      respm edit 1 --deadline 2024-06-30
      respm edit 1 --deadline none
    """
    app: App = ctx.obj["app"]
    edits = {
        "title": title,
        "description": description,
        "status": status,
        "start_date": start_date,
        "end_date": end_date,
        "deadline": deadline,
    }
    edits = {k: v for k, v in edits.items() if v is not None}
    if not edits:
        click.echo("Error: Nothing to change. See 'respm edit --help'.", err=True)
        raise SystemExit(1)

    project = app.projects.fetch_by_id(project_id)
    if project is None:
        click.echo(f"Error: {app.projects.state.error}", err=True)
        raise SystemExit(1)

    try:
        edited = apply_edits(project, edits)
    except ValidationError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    updated = app.projects.update(edited)
    if updated is None:
        click.echo(f"Error: {app.projects.state.error}", err=True)
        raise SystemExit(1)
    click.echo(f"project/{updated.id} configured")


@click.command("set-status")
@click.argument("project_id", type=int)
@click.argument(
    "status",
    type=click.Choice([s.value for s in ProjectStatus], case_sensitive=False),
)
@click.pass_context
def set_status_cmd(ctx: click.Context, project_id: int, status: str):
    """Change the status of a project.

    The server records the change in the project's status history.

    \b
    Examples:
      respm set-status 1 IN_PROGRESS
      respm set-status 4 completed
    """
    app: App = ctx.obj["app"]

    updated = app.projects.update_status(project_id, ProjectStatus(status.upper()))
    if updated is None:
        click.echo(f"Error: {app.projects.state.error}", err=True)
        raise SystemExit(1)
    status_text = getattr(updated.status, "value", updated.status)
    click.echo(f"project/{updated.id} status is now {status_text}")
