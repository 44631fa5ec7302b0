"""Config command - view and change the CLI configuration."""

import click

from ..config import (
    SETTABLE_KEYS,
    coerce_value,
    get_config_path,
    get_server,
    get_timeout,
    get_user_id,
    load_config,
    save_config,
)


@click.group("config")
def config_cmd():
    """View or change configuration (~/.respm/config.yaml)."""


@config_cmd.command("view")
def view():
    """Show the effective configuration."""
    config = load_config()
    timeout = get_timeout(config)
    click.echo(f"config: {get_config_path()}")
    click.echo(f"server: {get_server(config)}")
    click.echo(f"timeout: {timeout if timeout is not None else 'none'}")
    click.echo(f"user_id: {get_user_id(config)}")
    if config.get("logged_in"):
        click.echo(f"logged in as: {config.get('username', 'unknown')}")


@config_cmd.command("set")
@click.argument("key", type=click.Choice(SETTABLE_KEYS))
@click.argument("value")
def set_value(key: str, value: str):
    """Set a configuration value.

    \b
    Examples:
      respm config set server http://localhost:8080
      respm config set timeout 10
      respm config set user_id 2
    """
    try:
        coerced = coerce_value(key, value)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    config = load_config()
    config[key] = coerced
    save_config(config)
    click.echo(f"{key} set to {coerced}")


@config_cmd.command("unset")
@click.argument("key", type=click.Choice(SETTABLE_KEYS))
def unset_value(key: str):
    """Reset a configuration value to its default."""
    config = load_config()
    config.pop(key, None)
    save_config(config)
    click.echo(f"{key} reset to default")
