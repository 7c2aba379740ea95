"""
Task status vocabulary and normalization.

Clients may send a status in several spellings ("In Progress",
"in_progress", "DONE"). Everything written to the ``tasks.status`` column
passes through :func:`normalize_status`, so only the three canonical
values ever reach the database.
"""

import re
from enum import Enum


class TaskStatus(str, Enum):
    """Closed set of canonical task statuses."""

    PENDING = "pending"
    IN_PROGRESS = "inProgress"
    DONE = "done"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}

_CANONICAL = {status.value: status for status in TaskStatus}

_WORD_SEPARATORS = re.compile(r"[\s\-]+")


class InvalidStatus(ValueError):
    """Raised when a status string cannot be mapped to a canonical value."""

    def __init__(self, raw: object) -> None:
        super().__init__(f"Invalid status value: {raw!r}")
        self.raw = raw


def _camel_case(value: str) -> str:
    words = [word for word in _WORD_SEPARATORS.split(value) if word]
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def normalize_status(raw: object) -> TaskStatus:
    """
    Map a free-form status string onto a canonical :class:`TaskStatus`.

    Canonical values (and ``TaskStatus`` members) are returned unchanged.
    Anything else is trimmed, lowercased, has underscores turned into
    spaces and is camel-cased before being matched again, so
    ``"In_Progress"`` becomes ``"inProgress"``.

    Args:
        raw: The value supplied by the caller.

    Returns:
        The matching canonical status.

    Raises:
        InvalidStatus: If ``raw`` is not a string or does not normalize to
            one of the canonical values.
    """
    if isinstance(raw, TaskStatus):
        return raw
    if not isinstance(raw, str):
        raise InvalidStatus(raw)

    if raw in _CANONICAL:
        return _CANONICAL[raw]

    candidate = _camel_case(raw.strip().lower().replace("_", " "))
    try:
        return _CANONICAL[candidate]
    except KeyError:
        raise InvalidStatus(raw) from None
