"""Reviews commands - peer reviews, passed through as plain JSON."""

import json
from pathlib import Path
from typing import Optional

import click
import yaml

from ..app import App
from ..exceptions import RespmError
from ..output import format_resource_json, format_resource_yaml, format_table


@click.group("reviews")
def reviews_cmd():
    """List, show and submit peer reviews."""


@reviews_cmd.command("list")
@click.option("-o", "--output", type=click.Choice(["yaml", "json"]), help="Output format")
@click.pass_context
def list_reviews(ctx: click.Context, output: Optional[str]):
    """List reviews."""
    app: App = ctx.obj["app"]
    try:
        reviews = app.client.list_reviews()
    except RespmError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if output == "yaml":
        click.echo(format_resource_yaml({"items": reviews}))
        return
    if output == "json":
        click.echo(format_resource_json({"items": reviews}))
        return

    rows = [
        [
            str(review.get("id", "-")),
            str(review.get("projectTitle") or review.get("title") or "-"),
            str(review.get("status") or "-"),
            str(review.get("deadline") or "-"),
        ]
        for review in reviews
        if isinstance(review, dict)
    ]
    click.echo(
        format_table(
            ["id", "project", "status", "deadline"],
            rows,
            empty_message="No reviews found.",
        )
    )


@reviews_cmd.command("get")
@click.argument("review_id", type=int)
@click.option("-o", "--output", type=click.Choice(["yaml", "json"]), default="yaml")
@click.pass_context
def get_review(ctx: click.Context, review_id: int, output: str):
    """Show one review."""
    app: App = ctx.obj["app"]
    try:
        review = app.client.get_review(review_id)
    except RespmError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if output == "json":
        click.echo(format_resource_json(review))
    else:
        click.echo(format_resource_yaml(review))


@reviews_cmd.command("update")
@click.argument("review_id", type=int)
@click.option(
    "-f", "--filename", required=True, help="YAML or JSON file with the review fields"
)
@click.pass_context
def update_review(ctx: click.Context, review_id: int, filename: str):
    """Submit a review from a file.

    \b
    Example:
      respm reviews update 1 -f review.yaml
    """
    app: App = ctx.obj["app"]
    path = Path(filename)
    if not path.exists():
        click.echo(f"Error: File not found: {filename}", err=True)
        raise SystemExit(1)

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                review = json.load(f)
            else:
                review = yaml.safe_load(f)
    except (ValueError, yaml.YAMLError) as e:
        click.echo(f"Error loading {path}: {e}", err=True)
        raise SystemExit(1)

    if not isinstance(review, dict):
        click.echo(f"Error: {path} must contain a mapping", err=True)
        raise SystemExit(1)

    try:
        app.client.update_review(review_id, review)
    except RespmError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"review/{review_id} submitted")
