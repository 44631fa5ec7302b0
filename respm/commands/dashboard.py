"""Dashboard command - aggregate statistics and a user summary."""

from typing import Optional

import click

from ..app import App
from ..output import format_dashboard, format_resource_json, format_resource_yaml


@click.command("dashboard")
@click.option("--user-id", type=int, default=None, help="User to summarize")
@click.option("-o", "--output", type=click.Choice(["yaml", "json"]), help="Output format")
@click.pass_context
def dashboard_cmd(ctx: click.Context, user_id: Optional[int], output: Optional[str]):
    """Show the dashboard.

    \b
    Examples:
      respm dashboard
      respm dashboard --user-id 2 -o yaml
    """
    app: App = ctx.obj["app"]
    store = app.dashboard
    if user_id is not None:
        store.user_id = user_id

    if not store.fetch_dashboard_data():
        click.echo(f"Error: {store.state.error}", err=True)
        raise SystemExit(1)

    state = store.state
    if output in ("yaml", "json"):
        data = {
            "stats": state.stats.to_payload(),
            "userSummary": state.user_summary.to_payload(),
        }
        if output == "yaml":
            click.echo(format_resource_yaml(data))
        else:
            click.echo(format_resource_json(data))
        return

    click.echo(format_dashboard(state.stats, state.user_summary))
