"""Describe and history commands - show one project in detail."""

import click

from ..app import App
from ..exceptions import RespmError
from ..output import format_describe, format_resource_json, format_status_history


@click.command("describe")
@click.argument("project_id", type=int)
@click.pass_context
def describe_cmd(ctx: click.Context, project_id: int):
    """Show detailed information about a project, including status history.

    \b
    Examples:
      respm describe 1
    """
    app: App = ctx.obj["app"]

    project = app.projects.fetch_by_id(project_id)
    if project is None:
        click.echo(f"Error: {app.projects.state.error}", err=True)
        raise SystemExit(1)

    try:
        history = app.client.get_status_history(project_id)
    except RespmError as e:
        click.echo(f"Warning: status history unavailable: {e}", err=True)
        history = None

    click.echo(format_describe(project, history))


@click.command("history")
@click.argument("project_id", type=int)
@click.option("-o", "--output", type=click.Choice(["json"]), help="Output format")
@click.pass_context
def history_cmd(ctx: click.Context, project_id: int, output):
    """Show the status history of a project.

    \b
    Examples:
      respm history 1
      respm history 1 -o json
    """
    app: App = ctx.obj["app"]

    try:
        history = app.client.get_status_history(project_id)
    except RespmError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if output == "json":
        click.echo(format_resource_json([entry.to_payload() for entry in history]))
    else:
        click.echo(format_status_history(history))
