"""
Unit tests for demo data seeding.
"""

from collections import Counter

import pytest
from sqlalchemy import func, select

from app.models import Task
from app.seed import make_task, seed_tasks
from app.status import TaskStatus


pytestmark = pytest.mark.unit


def test_make_task_uses_given_status_and_overrides(db_session):
    task = make_task("in progress", title="Seeded title")

    assert task.status is TaskStatus.IN_PROGRESS
    assert task.title == "Seeded title"


def test_make_task_picks_a_canonical_status(db_session):
    task = make_task()

    assert task.status in set(TaskStatus)
    assert 3 <= len(task.title) <= 150


def test_seed_tasks_distribution(db_session):
    seed_tasks(db_session.session)

    counts = Counter(db_session.session.scalars(select(Task.status)).all())

    assert db_session.session.scalar(select(func.count(Task.id))) == 10
    assert counts == {TaskStatus.PENDING: 3, TaskStatus.IN_PROGRESS: 4, TaskStatus.DONE: 3}


def test_seed_command(app, db_session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed-tasks"])

    assert result.exit_code == 0
    assert "Created 10 tasks" in result.output
