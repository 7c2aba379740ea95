"""
Demo data for local development.

``flask seed-tasks`` fills the database with a small, evenly spread set of
tasks. Tasks are built through the model, so their statuses go through
the same normalization as API writes.
"""

import logging
import random
from typing import Any

import click
from faker import Faker
from flask import Flask
from sqlalchemy.orm import Session

from app import db
from app.models import Task
from app.status import TaskStatus

logger = logging.getLogger(__name__)

fake = Faker()

# 3 pending, 4 in progress, 3 done
SEED_DISTRIBUTION = {
    TaskStatus.PENDING: 3,
    TaskStatus.IN_PROGRESS: 4,
    TaskStatus.DONE: 3,
}


def make_task(status: TaskStatus | str | None = None, **overrides: Any) -> Task:
    """
    Build an unsaved task with Faker-generated content.

    Args:
        status: Status for the task; a random canonical status if omitted.
        **overrides: Explicit values for ``title`` or ``description``.

    Returns:
        A new, unsaved ``Task``.
    """
    fields: dict[str, Any] = {
        "title": fake.sentence(nb_words=3),
        "description": fake.paragraph() if fake.boolean() else None,
        "status": status if status is not None else random.choice(list(TaskStatus)),
    }
    fields.update(overrides)
    return Task(**fields)


def seed_tasks(session: Session) -> list[Task]:
    """Add and commit the demo task set, returning the created tasks."""
    tasks = [
        make_task(status)
        for status, count in SEED_DISTRIBUTION.items()
        for _ in range(count)
    ]
    session.add_all(tasks)
    session.commit()
    logger.info(f"Seeded {len(tasks)} tasks")
    return tasks


def register_commands(app: Flask) -> None:
    """Register the ``seed-tasks`` CLI command."""

    @app.cli.command("seed-tasks")
    def seed_tasks_command() -> None:
        """Insert demo tasks into the database."""
        tasks = seed_tasks(db.session)
        click.echo(f"Created {len(tasks)} tasks")
