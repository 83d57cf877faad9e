"""Tests for task field changes and the status/completed coupling."""

from typing import Callable

import pendulum
import pytest

from wbsplan.exception import InvalidInputError
from wbsplan.model.task import Task, TaskStatus
from wbsplan.service.task_field import (
    apply_task_field_change,
    apply_task_field_changes,
    normalize_task,
)


def test_completing_sets_done(make_task: Callable[..., Task]) -> None:
    """completed=True moves the status to Done."""
    result = apply_task_field_change(make_task(), "completed", True)

    assert result["completed"]
    assert result["status"] == TaskStatus.DONE


def test_uncompleting_sets_in_progress(make_task: Callable[..., Task]) -> None:
    """completed=False moves the status to In Progress."""
    task = make_task(completed=True, status=TaskStatus.DONE)

    result = apply_task_field_change(task, "completed", False)

    assert not result["completed"]
    assert result["status"] == TaskStatus.IN_PROGRESS


@pytest.mark.parametrize(
    ("status", "completed"),
    [
        (TaskStatus.DONE, True),
        (TaskStatus.REVIEW, False),
        (TaskStatus.PENDING, False),
    ],
)
def test_status_drives_completed(
    make_task: Callable[..., Task], status: str, completed: bool
) -> None:
    """Only Done means completed."""
    task = make_task(completed=True, status=TaskStatus.DONE)

    result = apply_task_field_change(task, "status", status)

    assert result["completed"] is completed


def test_change_returns_a_copy(make_task: Callable[..., Task]) -> None:
    """The original record is untouched."""
    task = make_task()

    apply_task_field_change(task, "name", "Renamed")

    assert task["name"] != "Renamed"


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("id", "other"),
        ("colour", "red"),
        ("status", "Finished"),
        ("estimate_hours", 8),
        ("estimate_days", -1),
        ("schedule_type", "MANUAL"),
        ("start_date", "tomorrow"),
    ],
)
def test_invalid_changes_are_rejected(
    make_task: Callable[..., Task], field: str, value: object
) -> None:
    """Unknown fields, immutable ids and invalid values are faults."""
    with pytest.raises(InvalidInputError):
        apply_task_field_change(make_task(), field, value)


def test_candidates_are_sorted_and_deduplicated(make_task: Callable[..., Task]) -> None:
    """Candidate dates become a sorted list of distinct dates."""
    result = apply_task_field_change(
        make_task(), "date_candidates", ["2025-01-10", "2025-01-08", "2025-01-10"]
    )

    assert result["date_candidates"] == [
        pendulum.date(2025, 1, 8),
        pendulum.date(2025, 1, 10),
    ]


def test_later_changes_win(make_task: Callable[..., Task]) -> None:
    """Changes apply in order, so the last coupling wins."""
    result = apply_task_field_changes(
        make_task(), {"status": TaskStatus.DONE, "completed": False}
    )

    assert result["status"] == TaskStatus.IN_PROGRESS
    assert not result["completed"]


def test_normalize_requires_scheduling_fields(make_task: Callable[..., Task]) -> None:
    """A task without an estimate cannot be scheduled."""
    task = make_task()
    del task["estimate_days"]  # type: ignore[misc]

    with pytest.raises(InvalidInputError):
        normalize_task(task)


def test_normalize_parses_start_date(make_task: Callable[..., Task]) -> None:
    """String dates become pendulum dates."""
    result = normalize_task(make_task(start_date="2025-03-03"))

    assert result["start_date"] == pendulum.date(2025, 3, 3)
