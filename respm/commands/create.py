"""Create command - create projects from options or files."""

from pathlib import Path
from typing import List, Optional

import click
import yaml

from ..app import App
from ..exceptions import ValidationError
from ..forms import validate_draft
from ..output import format_resource_yaml


def load_drafts_from_file(filepath: str) -> List[dict]:
    """Load project drafts from YAML file (supports multi-document)."""
    drafts = []
    with open(filepath, "r", encoding="utf-8") as f:
        for doc in yaml.safe_load_all(f):
            if doc:
                if isinstance(doc, list):
                    drafts.extend(doc)
                else:
                    drafts.append(doc)
    return drafts


@click.command("create")
@click.option("--title", help="Project title")
@click.option("--description", default="", help="Project description")
@click.option("--status", default="PENDING", help="Initial status")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.option("--deadline", help="Deadline (YYYY-MM-DD), optional")
@click.option(
    "-f", "--filename", multiple=True, help="YAML file(s) containing project drafts"
)
@click.option("--dry-run", is_flag=True, help="Print the drafts without creating")
@click.pass_context
def create_cmd(
    ctx: click.Context,
    title: Optional[str],
    description: str,
    status: str,
    start_date: Optional[str],
    end_date: Optional[str],
    deadline: Optional[str],
    filename: tuple,
    dry_run: bool,
):
    """Create projects.

    \b
    Examples:
      respm create --title "Soil microbiome" --start-date 2024-03-01 --end-date 2024-12-31
      respm create --title "Survey" --start-date 2024-03-01 --end-date 2024-06-01 --deadline 2024-05-15
      respm create -f projects.yaml
      respm create -f projects.yaml --dry-run

    File keys: title, description, status, startDate, endDate, deadline.
    """
    app: App = ctx.obj["app"]

    raw_drafts = []
    if filename:
        for f in filename:
            path = Path(f)
            if not path.exists():
                click.echo(f"Error: File not found: {f}", err=True)
                raise SystemExit(1)
            try:
                raw_drafts.extend(load_drafts_from_file(str(path)))
            except yaml.YAMLError as e:
                click.echo(f"Error loading {path}: {e}", err=True)
                raise SystemExit(1)
        if not raw_drafts:
            click.echo("No projects found in files.", err=True)
            raise SystemExit(1)
    else:
        raw_drafts.append(
            {
                "title": title,
                "description": description,
                "status": status,
                "start_date": start_date,
                "end_date": end_date,
                "deadline": deadline,
            }
        )

    drafts = []
    for index, raw in enumerate(raw_drafts):
        if not isinstance(raw, dict):
            click.echo(f"Error: Entry {index + 1} is not a mapping", err=True)
            raise SystemExit(1)
        try:
            drafts.append(validate_draft(raw))
        except ValidationError as e:
            label = raw.get("title") or f"entry {index + 1}"
            click.echo(f"Error: {label}: {e.message}", err=True)
            raise SystemExit(1)

    if dry_run:
        for draft in drafts:
            click.echo("---")
            click.echo(format_resource_yaml(draft.to_payload()).rstrip())
        return

    failed = False
    for draft in drafts:
        project = app.projects.create(draft)
        if project is None:
            click.echo(f"Error: {app.projects.state.error}", err=True)
            failed = True
            continue
        click.echo(f"project/{project.id} created ({project.title})")

    if failed:
        raise SystemExit(1)
