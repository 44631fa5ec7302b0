"""
Client-side validation of project forms.

Validation failures raise ``ValidationError`` with one message per field and
are never sent to the backend.
"""

from typing import Any, Dict

import pydantic
from pydantic.alias_generators import to_camel, to_snake

from .exceptions import ValidationError
from .models import Project, ProjectDraft
from .status import ProjectStatus, parse_project_status

EDITABLE_FIELDS = ("title", "description", "status", "start_date", "end_date", "deadline")

# Values accepted to clear a deadline
NO_DEADLINE_VALUES = ("", "none", "null")


def _field_name(loc) -> str:
    """Form field name for a pydantic error location."""
    if not loc:
        return "__root__"
    first = str(loc[0])
    # The deadline is validated inside the tracking variant
    if first == "tracking":
        return "deadline"
    return to_snake(first)


def _field_errors(error: pydantic.ValidationError) -> Dict[str, str]:
    errors = {}
    for item in error.errors():
        errors.setdefault(_field_name(item["loc"]), item["msg"])
    return errors


def _check_status(value: Any, errors: Dict[str, str]) -> None:
    if value is not None and not isinstance(parse_project_status(value), ProjectStatus):
        valid = ", ".join(s.value for s in ProjectStatus)
        errors["status"] = f"Unknown status {value!r}, expected one of: {valid}"


def validate_draft(fields: Dict[str, Any]) -> ProjectDraft:
    """Build a ProjectDraft from form fields (snake_case or camelCase keys)."""
    errors: Dict[str, str] = {}
    _check_status(fields.get("status"), errors)
    data = {k: v for k, v in fields.items() if v is not None}
    if isinstance(data.get("deadline"), str) and data["deadline"].lower() in NO_DEADLINE_VALUES:
        data.pop("deadline")
    try:
        draft = ProjectDraft.model_validate(data)
    except pydantic.ValidationError as e:
        errors = {**_field_errors(e), **errors}
        raise ValidationError(errors)
    if errors:
        raise ValidationError(errors)
    return draft


def apply_edits(project: Project, edits: Dict[str, Any]) -> Project:
    """Return a copy of project with the edited fields, validated.

    Only fields in EDITABLE_FIELDS may change; ``None`` values are ignored.
    Changing the deadline drops the old deadline status, which only the
    backend can compute.
    """
    errors: Dict[str, str] = {}
    unknown = [key for key in edits if key not in EDITABLE_FIELDS]
    for key in unknown:
        errors[key] = "Field cannot be edited"
    _check_status(edits.get("status"), errors)

    title = edits.get("title")
    if title is not None and not str(title).strip():
        errors["title"] = "Title is required"
    if errors:
        raise ValidationError(errors)

    payload = project.to_payload()
    for key, value in edits.items():
        if value is None:
            continue
        if key == "deadline":
            if isinstance(value, str) and value.lower() in NO_DEADLINE_VALUES:
                value = None
            payload["deadlineStatus"] = None
        if key == "title":
            value = str(value).strip()
        payload[to_camel(key)] = value

    try:
        return Project.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(_field_errors(e))
