"""Login command - check credentials and remember the user locally."""

from typing import Optional

import click

from ..app import App
from ..config import load_config, save_config
from ..exceptions import RequestError, RespmError


@click.command("login")
@click.option("-u", "--username", default=None, help="Username (email)")
@click.option("-p", "--password", default=None, help="Password")
@click.pass_context
def login_cmd(ctx: click.Context, username: Optional[str], password: Optional[str]):
    """Log in to the research project API.

    The backend only checks the credentials; no session or token is kept.
    On success the user name is remembered in the config file.

    \b
    Examples:
      respm login                      # Interactive login
      respm login -u alice@example.org # Prompt for password only
    """
    app: App = ctx.obj["app"]

    if not username:
        username = click.prompt("Username")
    if not password:
        password = click.prompt("Password", hide_input=True)

    try:
        result = app.client.login(username, password)
    except RequestError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        raise SystemExit(1)
    except RespmError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    name = result.get("username", username) if isinstance(result, dict) else username
    config = load_config()
    config["logged_in"] = True
    config["username"] = name
    save_config(config)

    click.echo(click.style("\n✓ Login successful!", fg="green"))
    click.echo(f"  Server: {app.client.server}")
    click.echo(f"  User: {name}")


@click.command("logout")
def logout_cmd():
    """Forget the logged in user.

    \b
    Example:
      respm logout
    """
    config = load_config()
    if config.get("logged_in"):
        config.pop("logged_in", None)
        config.pop("username", None)
        save_config(config)
        click.echo(click.style("✓ Logged out successfully.", fg="green"))
    else:
        click.echo("Not logged in.")
