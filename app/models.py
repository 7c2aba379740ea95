"""
Database models for the Task Manager application.

This module defines SQLAlchemy models representing the data structure
of the application. Each model maps to a database table.
"""

from datetime import datetime, timezone
from typing import Any

import humanize
from sqlalchemy import or_
from sqlalchemy.orm import validates

from app import db
from app.status import TaskStatus, normalize_status


TITLE_MAX_LENGTH = 150
DESCRIPTION_MAX_LENGTH = 1000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """
    Return ``value`` as an aware UTC datetime.

    SQLite commonly returns naive datetime values even when timezone-aware
    columns are declared; those are stored in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_utc_iso(value: datetime | None) -> str | None:
    """Convert datetime to an ISO-8601 UTC string."""
    if value is None:
        return None
    return _as_utc(value).isoformat()


def _to_human(value: datetime | None) -> str | None:
    """Relative time such as ``"3 days ago"``."""
    if value is None:
        return None
    return humanize.naturaltime(_as_utc(value), when=_utcnow())


class Task(db.Model):
    """
    Task model representing a to-do item.

    Attributes:
        id: Unique identifier for the task.
        title: Short title describing the task.
        description: Optional details about the task.
        status: Canonical status (pending, inProgress, done).
        created_at: Timestamp when the task was created.
        updated_at: Timestamp when the task was last modified.
    """

    __tablename__ = "tasks"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    description: str | None = db.Column(db.Text, nullable=True)
    status: TaskStatus = db.Column(
        db.Enum(
            TaskStatus,
            name="task_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow
    )

    @validates("status")
    def _normalize_status(self, key: str, value: Any) -> TaskStatus:
        # Every ORM write path (API, seeders, tests) funnels through here.
        return normalize_status(value)

    @classmethod
    def search_clause(cls, term: str):
        """
        Case-insensitive substring match against title or description.

        LIKE wildcards in ``term`` are escaped, so ``"50%"`` matches the
        literal text.
        """
        return or_(
            cls.title.icontains(term, autoescape=True),
            cls.description.icontains(term, autoescape=True),
        )

    @property
    def is_done(self) -> bool:
        """Whether the task has reached the ``done`` status."""
        return self.status == TaskStatus.DONE

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to a dictionary representation.

        Returns:
            Dictionary containing the task fields plus the derived
            ``status_label``, ``is_done`` and relative ``*_human`` values.
        """
        status = TaskStatus(self.status)
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": status.value,
            "status_label": status.label,
            "is_done": self.is_done,
            "created_at": _to_utc_iso(self.created_at),
            "updated_at": _to_utc_iso(self.updated_at),
            "created_at_human": _to_human(self.created_at),
            "updated_at_human": _to_human(self.updated_at),
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"


class User(db.Model):
    """
    Authenticated principal.

    Accounts are provisioned by the external auth service that issues the
    bearer tokens; this application only reads them back.
    """

    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(255), nullable=False)
    email: str = db.Column(db.String(255), unique=True, nullable=False, index=True)
    email_verified_at: datetime | None = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow
    )

    def to_dict(self) -> dict[str, Any]:
        """Public fields of the user."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": _to_utc_iso(self.created_at),
            "updated_at": _to_utc_iso(self.updated_at),
        }

    def to_profile(self) -> dict[str, Any]:
        """Detailed profile, including the email verification timestamp."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "email_verified_at": _to_utc_iso(self.email_verified_at),
            "created_at": _to_utc_iso(self.created_at),
            "updated_at": _to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"
