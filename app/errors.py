"""
API error types and their JSON error handlers.

Route handlers raise these exceptions; the handlers registered by
:func:`register_error_handlers` turn them (and any Werkzeug HTTP error or
database failure) into the standard failure envelope.
"""

import logging

from flask import Flask, Response
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from app import db
from app.responses import error_response, validation_error_response

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors reported to API clients."""

    status_code = 400
    message = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class TaskNotFound(ApiError):
    """The requested task id does not exist."""

    status_code = 404
    message = "Task not found"

    def __init__(self, task_id: int) -> None:
        super().__init__()
        self.task_id = task_id


class TaskValidationError(ApiError):
    """
    One or more payload fields failed validation.

    Attributes:
        errors: Mapping of field name to a list of violation messages.
    """

    status_code = 422
    message = "The given data was invalid."

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__()
        self.errors = errors


class Unauthenticated(ApiError):
    """Missing, invalid or expired bearer token."""

    status_code = 401
    message = "Unauthenticated."


_HTTP_MESSAGES = {
    400: "Bad request",
    404: "Resource not found",
    405: "Method not allowed",
    415: "Request body must be JSON",
}


def register_error_handlers(app: Flask) -> None:
    """Attach the JSON error handlers to the application."""

    @app.errorhandler(TaskValidationError)
    def handle_validation_error(error: TaskValidationError) -> tuple[Response, int]:
        logger.warning(f"Validation failed: {error.errors}")
        return validation_error_response(error.errors)

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError) -> tuple[Response, int]:
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException) -> tuple[Response, int]:
        status_code = error.code or 500
        return error_response(_HTTP_MESSAGES.get(status_code, error.name), status_code)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error: SQLAlchemyError) -> tuple[Response, int]:
        db.session.rollback()
        logger.exception("Database error")
        return error_response("Internal server error", 500)

    @app.errorhandler(500)
    def internal_error(error: Exception) -> tuple[Response, int]:
        logger.error(f"Internal server error: {error}")
        return error_response("Internal server error", 500)
