"""
Request payload validation for task writes.

Collects every field violation (rather than stopping at the first) so the
client can highlight all invalid form fields at once.
"""

from typing import Any

from app.errors import TaskValidationError
from app.models import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from app.status import InvalidStatus, TaskStatus, normalize_status

TITLE_MIN_LENGTH = 3
WRITABLE_FIELDS = ("title", "description", "status")

MESSAGES = {
    "title.required": "The task title is required.",
    "title.string": "The task title must be a string.",
    "title.min": f"The task title must be at least {TITLE_MIN_LENGTH} characters.",
    "title.max": f"The task title may not be greater than {TITLE_MAX_LENGTH} characters.",
    "description.string": "The description must be a string.",
    "description.max": f"The description may not be greater than {DESCRIPTION_MAX_LENGTH} characters.",
    "status.in": "The status must be one of: pending, in progress, or done.",
}


def _check_title(value: Any) -> tuple[str | None, str | None]:
    if value is None:
        return None, MESSAGES["title.required"]
    if not isinstance(value, str):
        return None, MESSAGES["title.string"]
    title = value.strip()
    if not title:
        return None, MESSAGES["title.required"]
    if len(title) < TITLE_MIN_LENGTH:
        return None, MESSAGES["title.min"]
    if len(title) > TITLE_MAX_LENGTH:
        return None, MESSAGES["title.max"]
    return title, None


def _check_description(value: Any) -> tuple[str | None, str | None]:
    if value is None:
        return None, None
    if not isinstance(value, str):
        return None, MESSAGES["description.string"]
    if len(value) > DESCRIPTION_MAX_LENGTH:
        return None, MESSAGES["description.max"]
    return value, None


def _check_status(value: Any) -> tuple[TaskStatus | None, str | None]:
    try:
        return normalize_status(value), None
    except InvalidStatus:
        return None, MESSAGES["status.in"]


_CHECKS = {
    "title": _check_title,
    "description": _check_description,
    "status": _check_status,
}


def validate_task_payload(data: dict[str, Any], *, partial: bool = False) -> dict[str, Any]:
    """
    Validate a task payload and return the cleaned writable fields.

    Only ``title``, ``description`` and ``status`` are considered; anything
    else in ``data`` (``id``, timestamps, unknown keys) is ignored. The
    returned status is already normalized to a :class:`TaskStatus`.

    Args:
        data: Decoded JSON request body.
        partial: When True (updates), absent fields are skipped; otherwise
            ``title`` is required and ``status`` defaults to ``pending``.

    Returns:
        Mapping of field name to cleaned value, for the fields to write.

    Raises:
        TaskValidationError: If any field is invalid.
    """
    cleaned: dict[str, Any] = {}
    errors: dict[str, list[str]] = {}

    for field in WRITABLE_FIELDS:
        if field not in data:
            if partial:
                continue
            if field == "title":
                errors["title"] = [MESSAGES["title.required"]]
            elif field == "status":
                cleaned["status"] = TaskStatus.PENDING
            continue

        value, error = _CHECKS[field](data[field])
        if error:
            errors[field] = [error]
        else:
            cleaned[field] = value

    if errors:
        raise TaskValidationError(errors)
    return cleaned
