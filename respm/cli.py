"""Main CLI entry point."""

import logging

import click

from . import __version__
from .app import App
from .commands.config import config_cmd
from .commands.create import create_cmd
from .commands.dashboard import dashboard_cmd
from .commands.deadlines import deadlines_cmd
from .commands.delete import delete_cmd
from .commands.describe import describe_cmd, history_cmd
from .commands.edit import edit_cmd, set_status_cmd
from .commands.get import get_cmd
from .commands.login import login_cmd, logout_cmd
from .commands.reviews import reviews_cmd
from .config import parse_timeout
from .logger import setup_logger
from .status import ProjectStatus, status_color

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def _timeout_option(ctx, param, value):
    if value is None:
        return None
    try:
        return parse_timeout(value) or 0.0
    except ValueError as e:
        raise click.BadParameter(str(e))


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="respm")
@click.option("-s", "--server", envvar="RESPM_SERVER", help="API server URL")
@click.option(
    "--timeout",
    callback=_timeout_option,
    help="Request timeout in seconds (0 disables it)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log requests to stderr")
@click.pass_context
def cli(ctx: click.Context, server: str, timeout, verbose: bool):
    """respm - research project manager.

    \b
    Manage research projects, their status and deadlines from the shell.

    \b
    Quick start:
      respm config set server http://localhost:8080
      respm get
      respm get --status IN_PROGRESS --search learning
      respm create --title "Protein folding" --start-date 2024-03-01 --end-date 2024-09-01
      respm set-status 1 COMPLETED
      respm dashboard

    \b
    Environment variables:
      RESPM_SERVER     - API server URL
      RESPM_TIMEOUT    - Request timeout in seconds
      RESPM_USER_ID    - User shown on the dashboard
      RESPM_CONFIG_DIR - Configuration directory (default: ~/.respm)
    """
    setup_logger(logging.DEBUG if verbose else logging.WARNING)
    ctx.ensure_object(dict)
    try:
        app = App.from_config(server=server, timeout=timeout)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    ctx.obj["app"] = app
    ctx.call_on_close(app.close)


# Register commands
cli.add_command(get_cmd)
cli.add_command(describe_cmd)
cli.add_command(history_cmd)
cli.add_command(create_cmd)
cli.add_command(edit_cmd)
cli.add_command(set_status_cmd)
cli.add_command(delete_cmd)
cli.add_command(deadlines_cmd)
cli.add_command(dashboard_cmd)
cli.add_command(reviews_cmd)
cli.add_command(config_cmd)
cli.add_command(login_cmd)
cli.add_command(logout_cmd)


@cli.command("statuses")
def statuses():
    """List project status values."""
    click.echo("STATUS        COLOR")
    for status in ProjectStatus:
        click.echo(f"{status.value:14}{status_color(status)}")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
