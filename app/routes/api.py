"""
REST API endpoints for Task management.

This module provides CRUD operations for tasks via HTTP methods.
All endpoints return the standard JSON envelope
(``{"success", "message", "data" | "errors"}``).

Endpoints:
    GET    /api/health         - Health check
    GET    /api/tasks          - List tasks (filter, search, sort, paginate)
    GET    /api/tasks/<id>     - Get a single task by ID
    POST   /api/tasks          - Create a new task
    PUT    /api/tasks/<id>     - Update an existing task (partial)
    PATCH  /api/tasks/<id>     - Same as PUT
    DELETE /api/tasks/<id>     - Delete a task
"""

import logging
import os
from typing import Any

from flask import Blueprint, Response, current_app, request, url_for

from app import db
from app.errors import ApiError, TaskNotFound
from app.models import Task
from app.pagination import format_page
from app.query import PaginationSettings, TaskQueryBuilder
from app.responses import success_response
from app.validation import validate_task_payload

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def get_task_or_404(task_id: int) -> Task:
    """Fetch task by ID or raise ``TaskNotFound``."""
    task = db.session.get(Task, task_id)
    if task is None:
        logger.warning(f"Task {task_id} not found")
        raise TaskNotFound(task_id)
    return task


def get_json_body() -> dict[str, Any]:
    """
    Return the decoded JSON object body.

    ``request.get_json`` already answers 415 for a missing JSON content type
    and 400 for malformed JSON; a body that is not an object is a 400 too.
    """
    data = request.get_json()
    if not isinstance(data, dict):
        raise ApiError("Request body must be a JSON object")
    return data


def task_query_builder() -> TaskQueryBuilder:
    return TaskQueryBuilder(PaginationSettings.from_mapping(current_app.config))


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return success_response(
        {
            "status": "healthy",
            "environment": os.getenv("ENVIRONMENT", "unknown"),
            "version": os.getenv("APP_VERSION", "unknown"),
        },
        "Service is healthy",
    )


@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List tasks with filtering, search, sorting and pagination.

    Query Parameters:
        status: Exact canonical status (pending, inProgress, done)
        search: Case-insensitive text matched against title or description
        sort_by: id, title, status, created_at (default) or updated_at
        sort_dir: asc or desc (default)
        per_page: Page size, clamped to [1, MAX_PER_PAGE]
        page: 1-based page number

    Returns:
        Envelope whose ``data`` holds the page items and pagination ``meta``.
    """
    logger.info("GET /api/tasks - Listing tasks")

    query = task_query_builder().build(request.args)
    pagination = query.execute(db)

    def url_for_page(page: int) -> str:
        return url_for("api.get_tasks", _external=True, **query.params, page=page)

    page = format_page(
        pagination,
        serialize=Task.to_dict,
        url_for_page=url_for_page,
        path=url_for("api.get_tasks", _external=True),
    )
    logger.info(
        f"Found {page['meta']['total']} tasks, returning page "
        f"{page['meta']['current_page']} of {page['meta']['last_page']}"
    )
    return success_response(page, "Tasks retrieved successfully")


@api_bp.route("/tasks/<int:task_id>", methods=["GET"])
def get_task(task_id: int) -> tuple[Response, int]:
    """
    Get a single task by ID.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        Envelope with the task, or a 404 envelope if not found.
    """
    logger.info(f"GET /api/tasks/{task_id} - Fetching task")

    task = get_task_or_404(task_id)
    return success_response(task.to_dict(), "Task retrieved successfully")


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON):
        title: Task title (required, 3-150 characters)
        description: Task description (optional, up to 1000 characters)
        status: Task status in any recognized spelling (default: pending)

    Returns:
        Envelope with the created task and 201, or 422 with field errors.
    """
    logger.info("POST /api/tasks - Creating new task")

    fields = validate_task_payload(get_json_body())

    task = Task(**fields)
    db.session.add(task)
    db.session.commit()

    logger.info(f"Created task with ID: {task.id}")
    return success_response(task.to_dict(), "Task created successfully", 201)


@api_bp.route("/tasks/<int:task_id>", methods=["PUT", "PATCH"])
def update_task(task_id: int) -> tuple[Response, int]:
    """
    Update an existing task.

    Any subset of ``title``, ``description`` and ``status`` may be sent;
    absent fields are left unchanged.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        Envelope with the updated task, or a 404/422 envelope.
    """
    logger.info(f"{request.method} /api/tasks/{task_id} - Updating task")

    task = get_task_or_404(task_id)
    fields = validate_task_payload(get_json_body(), partial=True)

    for name, value in fields.items():
        setattr(task, name, value)
    db.session.commit()

    logger.info(f"Updated task {task_id}")
    return success_response(task.to_dict(), "Task updated successfully")


@api_bp.route("/tasks/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> tuple[Response, int]:
    """
    Delete a task.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        Envelope with ``data: null``, or a 404 envelope if not found.
    """
    logger.info(f"DELETE /api/tasks/{task_id} - Deleting task")

    task = get_task_or_404(task_id)
    db.session.delete(task)
    db.session.commit()

    logger.info(f"Deleted task {task_id}")
    return success_response(None, "Task deleted successfully")
