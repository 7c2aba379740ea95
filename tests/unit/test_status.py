"""
Unit tests for status normalization.
"""

import pytest

from app.status import InvalidStatus, TaskStatus, normalize_status


pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Pending", TaskStatus.PENDING),
        ("in_progress", TaskStatus.IN_PROGRESS),
        ("DONE", TaskStatus.DONE),
        ("In Progress", TaskStatus.IN_PROGRESS),
        ("In_Progress", TaskStatus.IN_PROGRESS),
        ("  in progress  ", TaskStatus.IN_PROGRESS),
        ("in-progress", TaskStatus.IN_PROGRESS),
    ],
)
def test_normalize_recognized_spellings(raw, expected):
    assert normalize_status(raw) is expected


@pytest.mark.parametrize("canonical", ["pending", "inProgress", "done"])
def test_normalize_canonical_value_is_unchanged(canonical):
    """Canonical values take the identity path and round-trip exactly."""
    result = normalize_status(canonical)

    assert result.value == canonical
    assert normalize_status(result) is result


@pytest.mark.parametrize("raw", ["archived", "", "   ", "in progress now", "todo", "in__", "INPROGRESS"])
def test_normalize_unknown_value_raises_invalid_status(raw):
    with pytest.raises(InvalidStatus) as exc_info:
        normalize_status(raw)

    assert exc_info.value.raw == raw


@pytest.mark.parametrize("raw", [None, 1, ["done"]])
def test_normalize_non_string_raises_invalid_status(raw):
    with pytest.raises(InvalidStatus):
        normalize_status(raw)


def test_status_labels():
    assert TaskStatus.PENDING.label == "Pending"
    assert TaskStatus.IN_PROGRESS.label == "In Progress"
    assert TaskStatus.DONE.label == "Done"
