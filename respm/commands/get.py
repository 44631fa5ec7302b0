"""Get command - retrieve and display projects."""

from typing import Optional

import click

from ..app import App
from ..exceptions import RespmError
from ..output import (
    format_project_list,
    format_resource_json,
    format_resource_yaml,
)
from ..store import filter_projects
from ..status import ALL


def echo_projects(projects, output: Optional[str]) -> None:
    if output == "yaml":
        click.echo(format_resource_yaml({"items": [p.to_payload() for p in projects]}))
    elif output == "json":
        click.echo(format_resource_json({"items": [p.to_payload() for p in projects]}))
    else:
        click.echo(format_project_list(projects, wide=output == "wide"))


@click.command("get")
@click.argument("project_id", type=int, required=False)
@click.option("--status", "status_filter", default=ALL, help="Only projects with this status")
@click.option("--search", default="", help="Match title or description (case-insensitive)")
@click.option("--owner", type=int, help="Only projects owned by this user id (server query)")
@click.option(
    "--remote",
    is_flag=True,
    help="Let the server filter by --status instead of filtering locally",
)
@click.option(
    "-o", "--output", type=click.Choice(["wide", "yaml", "json"]), help="Output format"
)
@click.pass_context
def get_cmd(
    ctx: click.Context,
    project_id: Optional[int],
    status_filter: str,
    search: str,
    owner: Optional[int],
    remote: bool,
    output: Optional[str],
):
    """Get projects.

    \b
    Examples:
      respm get                          # List all projects
      respm get 3                        # Get specific project
      respm get --status IN_PROGRESS     # Filter by status
      respm get --search "machine"       # Search title and description
      respm get --owner 2 -o wide        # Projects of user 2, more columns
      respm get -o yaml                  # Output as YAML
    """
    app: App = ctx.obj["app"]
    store = app.projects

    if project_id is not None:
        project = store.fetch_by_id(project_id)
        if project is None:
            click.echo(f"Error: {store.state.error}", err=True)
            raise SystemExit(1)
        if output == "json":
            click.echo(format_resource_json(project.to_payload()))
        elif output in ("yaml", None):
            click.echo(format_resource_yaml(project.to_payload()))
        else:
            click.echo(format_project_list([project], wide=True))
        return

    try:
        store.set_status_filter(status_filter)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    store.set_search_term(search)

    if owner is not None or remote:
        # Server-side queries bypass the store's item list
        state = store.state
        try:
            if owner is not None:
                projects = app.client.list_projects_by_user(owner)
            elif state.status_filter != ALL:
                projects = app.client.list_projects_by_status(state.status_filter)
            else:
                projects = app.client.list_projects()
        except RespmError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        echo_projects(
            filter_projects(projects, state.status_filter, state.search_term), output
        )
        return

    if store.fetch_all() is None:
        click.echo(f"Error: {store.state.error}", err=True)
        raise SystemExit(1)
    echo_projects(store.filtered_projects(), output)
