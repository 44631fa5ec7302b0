"""Deadlines command - projects with upcoming or missed deadlines."""

from typing import Optional

import click

from ..app import App
from ..exceptions import RespmError
from .get import echo_projects


@click.command("deadlines")
@click.option(
    "--overdue", is_flag=True, help="Show overdue projects instead of upcoming ones"
)
@click.option(
    "-o", "--output", type=click.Choice(["wide", "yaml", "json"]), help="Output format"
)
@click.pass_context
def deadlines_cmd(ctx: click.Context, overdue: bool, output: Optional[str]):
    """List projects whose deadline is near or already passed.

    The server decides which deadlines count as upcoming.

    \b
    Examples:
      respm deadlines
      respm deadlines --overdue
    """
    app: App = ctx.obj["app"]

    try:
        if overdue:
            projects = app.client.list_overdue_projects()
        else:
            projects = app.client.list_upcoming_deadlines()
    except RespmError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    projects = sorted(projects, key=lambda p: (p.deadline is None, p.deadline, p.id))
    echo_projects(projects, output)
