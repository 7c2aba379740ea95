"""
Uniform JSON response envelope.

Every API response, successful or not, has the shape::

    {"success": bool, "message": str, "data": ...}          # success
    {"success": false, "message": str, "errors": {...}}     # failure
"""

from typing import Any

from flask import Response, jsonify


def success_response(
    data: Any = None,
    message: str = "OK",
    status_code: int = 200,
) -> tuple[Response, int]:
    """
    Build a successful envelope.

    Args:
        data: Resource or list payload (``None`` is serialized as ``null``).
        message: Human-readable confirmation.
        status_code: HTTP status code to return.

    Returns:
        A ``(Response, int)`` tuple ready to return from a view.
    """
    return jsonify({"success": True, "message": message, "data": data}), status_code


def error_response(
    message: str,
    status_code: int,
    errors: dict[str, list[str]] | None = None,
) -> tuple[Response, int]:
    """
    Build a failure envelope.

    Args:
        message: Summary of what went wrong.
        status_code: HTTP status code to return.
        errors: Optional mapping of field name to violation messages.

    Returns:
        A ``(Response, int)`` tuple ready to return from a view.
    """
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status_code


def validation_error_response(errors: dict[str, list[str]]) -> tuple[Response, int]:
    """Build the 422 envelope for field-level validation failures."""
    return error_response(_summarize(errors), 422, errors)


def _summarize(errors: dict[str, list[str]]) -> str:
    messages = [message for field_messages in errors.values() for message in field_messages]
    if not messages:
        return "The given data was invalid."
    if len(messages) == 1:
        return messages[0]
    extra = len(messages) - 1
    return f"{messages[0]} (and {extra} more error{'s' if extra > 1 else ''})"
