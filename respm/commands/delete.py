"""Delete command - delete projects."""

from typing import Optional

import click

from ..app import App


@click.command("delete")
@click.argument("project_ids", type=int, nargs=-1)
@click.option(
    "--all", "delete_all", is_flag=True, help="Delete all projects (matching --status)"
)
@click.option("--status", "status_filter", default=None, help="With --all: only this status")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_cmd(
    ctx: click.Context,
    project_ids: tuple,
    delete_all: bool,
    status_filter: Optional[str],
    yes: bool,
):
    """Delete projects.

    \b
    Examples:
      respm delete 3                        # Delete one project
      respm delete 3 4 5 -y                 # Delete several, skip confirm
      respm delete --all --status CANCELLED # Delete all cancelled projects
    """
    app: App = ctx.obj["app"]
    store = app.projects

    if delete_all:
        if status_filter:
            try:
                store.set_status_filter(status_filter)
            except ValueError as e:
                click.echo(f"Error: {e}", err=True)
                raise SystemExit(1)
        if store.fetch_all() is None:
            click.echo(f"Error: {store.state.error}", err=True)
            raise SystemExit(1)
        targets = store.filtered_projects()
        if not targets:
            click.echo("No projects found.")
            return
        if not yes:
            click.echo(f"About to delete {len(targets)} project(s):")
            for project in targets[:5]:
                click.echo(f"  - {project.id}: {project.title}")
            if len(targets) > 5:
                click.echo(f"  ... and {len(targets) - 5} more")
            if not click.confirm("Continue?"):
                raise SystemExit(0)
        ids = [project.id for project in targets]

    elif project_ids:
        if not yes:
            label = ", ".join(str(i) for i in project_ids)
            if not click.confirm(f"Delete project(s) {label}?"):
                raise SystemExit(0)
        ids = list(project_ids)

    else:
        click.echo(
            "Error: Specify projects to delete:\n"
            "  respm delete <id> [<id>...]\n"
            "  respm delete --all [--status <status>]",
            err=True,
        )
        raise SystemExit(1)

    failed = False
    for project_id in ids:
        if store.delete(project_id):
            click.echo(f"project/{project_id} deleted")
        else:
            click.echo(f"Error: {store.state.error}", err=True)
            failed = True

    if failed:
        raise SystemExit(1)
