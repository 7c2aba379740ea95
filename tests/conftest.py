"""
Shared pytest fixtures for the Task Manager test suite.

Fixtures provide a testing app, a Flask test client, a fresh database per
test, a Faker-backed task factory and bearer-token headers for the user
endpoints.
"""

import os
from datetime import datetime, timedelta
from typing import Any

import jwt
import pytest
from faker import Faker

from tests.helpers import SigningKeys, new_signing_keys, token_claims, with_bearer

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from app import create_app, db  # noqa: E402
from app.models import Task, User  # noqa: E402
from app.status import TaskStatus  # noqa: E402


fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def signing_keys() -> SigningKeys:
    """RSA key pair standing in for the external token issuer."""
    return new_signing_keys()


@pytest.fixture(scope="session")
def app(signing_keys):
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused
    for all tests. It trusts tokens signed with ``signing_keys``.
    """
    application = create_app("testing")
    application.config["JWT_PUBLIC_KEY"] = signing_keys.public_pem
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client for making HTTP requests."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Creates all tables before the test and rolls back and drops
    everything afterwards, so no rows leak between tests.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture for creating persisted Task instances.

    Example:
        def test_something(task_factory):
            task = task_factory(title="My Task")
            assert task.id is not None
    """

    def _create_task(
        title: str | None = None,
        description: str | None = None,
        status: str = TaskStatus.PENDING.value,
        created_at: datetime | None = None,
    ) -> Task:
        fields: dict[str, Any] = {
            "title": title or fake.sentence(nb_words=3),
            "description": description,
            "status": status,
        }
        if created_at is not None:
            fields["created_at"] = created_at
        task = Task(**fields)
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single pending task."""
    return task_factory(
        title="Sample Task",
        description="This is a sample task for testing",
        status=TaskStatus.PENDING.value,
    )


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """
    Create tasks with different statuses and searchable text.

    Two are in progress, one pending, one done; "login" appears in one
    title and one description.
    """
    return [
        task_factory(
            title="Fix login bug",
            description="Users cannot sign in with SSO",
            status=TaskStatus.PENDING.value,
        ),
        task_factory(
            title="Write release notes",
            description="Mention the new LOGIN flow",
            status=TaskStatus.IN_PROGRESS.value,
        ),
        task_factory(
            title="Refactor settings page",
            status=TaskStatus.IN_PROGRESS.value,
        ),
        task_factory(
            title="Archive old reports",
            description="Move everything older than a year",
            status=TaskStatus.DONE.value,
        ),
    ]


@pytest.fixture
def user(db_session) -> User:
    """Create the user referenced by the default test token."""
    account = User(id=1, name="Test User", email="test.user@example.com")
    db_session.session.add(account)
    db_session.session.commit()
    return account


# -----------------------------------------------------------------------------
# API Helper Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def api_headers() -> dict[str, str]:
    """Common headers for JSON API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }


@pytest.fixture
def issue_token(signing_keys):
    """
    Factory fixture for RS256 bearer tokens.

    Example:
        def test_something(issue_token):
            token = issue_token(7, expires_in=timedelta(hours=-1))
    """

    def _issue(
        user_id: Any,
        username: str = "test.user@example.com",
        expires_in: timedelta = timedelta(hours=1),
        private_key: str | None = None,
    ) -> str:
        return jwt.encode(
            token_claims(user_id, username, expires_in),
            private_key or signing_keys.private_pem,
            algorithm="RS256",
        )

    return _issue


@pytest.fixture
def user_headers(api_headers, user, issue_token) -> dict[str, str]:
    """JSON headers carrying a valid token for the ``user`` fixture."""
    return with_bearer(api_headers, issue_token(user.id, user.email))
