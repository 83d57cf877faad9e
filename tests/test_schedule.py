"""Tests for the forward schedule sweep."""

from typing import Callable

import pendulum
import pytest

from wbsplan.exception import InvalidInputError
from wbsplan.holiday import HolidayTable
from wbsplan.model.task import ScheduleType, Task
from wbsplan.service.schedule import calculate_progress, compute_schedule, recompute
from wbsplan.template.project import get_project_template

START = "2025-01-06"
DELIVERY = "2025-01-20"
DUE = "2025-01-25"


def _dates(tasks: list[Task]) -> list[tuple]:
    return [
        (task["id"], task["start_date"], task["end_date"], task["countdown_to_due"])
        for task in tasks
    ]


def test_single_auto_task(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """Two working days from a Monday ends on Wednesday."""
    task = make_task(estimate_days=2, estimate_hours=0)

    [result] = compute_schedule([task], START, DELIVERY, DUE, holidays=no_holidays)

    assert result["start_date"] == pendulum.date(2025, 1, 6)
    assert result["end_date"] == pendulum.date(2025, 1, 8)
    assert result["countdown_to_due"] == 8


def test_next_auto_task_starts_on_previous_end(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """The cursor after a task is its end date."""
    first = make_task(estimate_days=2, order_index=0)
    second = make_task(estimate_days=1, order_index=1)

    result = compute_schedule(
        [second, first], START, DELIVERY, DUE, holidays=no_holidays
    )

    assert [task["id"] for task in result] == [first["id"], second["id"]]
    assert result[1]["start_date"] == pendulum.date(2025, 1, 8)
    assert result[1]["end_date"] == pendulum.date(2025, 1, 9)


def test_auto_task_snaps_to_working_day(
    make_task: Callable[..., Task], jp_holidays: HolidayTable
) -> None:
    """A project starting on a weekend before a holiday starts on Tuesday."""
    task = make_task(estimate_days=1)

    [result] = compute_schedule(
        [task], "2025-01-11", DELIVERY, DUE, holidays=jp_holidays
    )

    assert result["start_date"] == pendulum.date(2025, 1, 14)
    assert result["end_date"] == pendulum.date(2025, 1, 15)


def test_fixed_task_keeps_weekend_start(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """A FIXED start on a Saturday is not moved; its end uses working days."""
    task = make_task(
        schedule_type=ScheduleType.FIXED,
        start_date="2025-01-11",
        estimate_days=1,
        estimate_hours=0,
    )

    [result] = compute_schedule([task], START, DELIVERY, DUE, holidays=no_holidays)

    assert result["start_date"] == pendulum.date(2025, 1, 11)
    assert result["end_date"] == pendulum.date(2025, 1, 13)


def test_fixed_task_may_start_before_cursor(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """FIXED dates are used as-is even when earlier than the previous task."""
    first = make_task(estimate_days=5, order_index=0)
    fixed = make_task(
        schedule_type=ScheduleType.FIXED,
        start_date="2025-01-07",
        estimate_days=0,
        estimate_hours=4,
        order_index=1,
    )

    result = compute_schedule([first, fixed], START, DELIVERY, DUE, holidays=no_holidays)

    assert result[1]["start_date"] == pendulum.date(2025, 1, 7)
    assert result[1]["end_date"] == pendulum.date(2025, 1, 8)


def test_fixed_task_without_start_behaves_as_auto(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """No pinned start falls back to AUTO placement."""
    task = make_task(schedule_type=ScheduleType.FIXED, start_date=None)

    [result] = compute_schedule([task], START, DELIVERY, DUE, holidays=no_holidays)

    assert result["start_date"] == pendulum.date(2025, 1, 6)
    assert result["end_date"] == pendulum.date(2025, 1, 7)


def test_coordination_picks_earliest_candidate_after_cursor(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """Candidates before the cursor are ignored; start and end are the same day."""
    first = make_task(estimate_days=3, order_index=0)
    meeting = make_task(
        schedule_type=ScheduleType.COORDINATION,
        date_candidates=["2025-01-16", "2025-01-07", "2025-01-10"],
        order_index=1,
    )

    result = compute_schedule(
        [first, meeting], START, DELIVERY, DUE, holidays=no_holidays
    )

    assert result[1]["start_date"] == pendulum.date(2025, 1, 10)
    assert result[1]["end_date"] == pendulum.date(2025, 1, 10)


def test_coordination_without_usable_candidate_behaves_as_auto(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """All candidates in the past fall back to AUTO placement."""
    meeting = make_task(
        schedule_type=ScheduleType.COORDINATION,
        date_candidates=["2025-01-01"],
        estimate_days=0,
        estimate_hours=4,
    )

    [result] = compute_schedule([meeting], START, DELIVERY, DUE, holidays=no_holidays)

    assert result["start_date"] == pendulum.date(2025, 1, 6)
    assert result["end_date"] == pendulum.date(2025, 1, 7)


def test_countdown_is_negative_after_delivery(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """Finishing after the delivery date gives a negative countdown."""
    task = make_task(estimate_days=12)

    [result] = compute_schedule([task], START, DELIVERY, DUE, holidays=no_holidays)

    assert result["end_date"] == pendulum.date(2025, 1, 22)
    assert result["countdown_to_due"] == -2


def test_custom_holidays_push_dates(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """Custom holidays are skipped like regional ones."""
    task = make_task(estimate_days=2)

    [result] = compute_schedule(
        [task], START, DELIVERY, DUE, ["2025-01-07"], holidays=no_holidays
    )

    assert result["end_date"] == pendulum.date(2025, 1, 9)


def test_compute_schedule_is_idempotent(
    make_task: Callable[..., Task], jp_holidays: HolidayTable
) -> None:
    """Recomputing computed tasks yields identical dates and countdowns."""
    tasks = [
        make_task(estimate_days=2, order_index=0),
        make_task(
            schedule_type=ScheduleType.COORDINATION,
            date_candidates=["2025-01-15"],
            order_index=1,
        ),
        make_task(
            schedule_type=ScheduleType.FIXED,
            start_date="2025-01-18",
            estimate_days=1,
            order_index=2,
        ),
        make_task(estimate_hours=6, estimate_days=0, order_index=3),
    ]

    once = compute_schedule(tasks, START, DELIVERY, DUE, holidays=jp_holidays)
    twice = compute_schedule(once, START, DELIVERY, DUE, holidays=jp_holidays)

    assert _dates(once) == _dates(twice)


def test_input_is_not_modified(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """The sweep returns new records."""
    task = make_task()

    compute_schedule([task], START, DELIVERY, DUE, holidays=no_holidays)

    assert task["start_date"] is None
    assert task["end_date"] is None


def test_empty_collection(no_holidays: HolidayTable) -> None:
    """No tasks, no dates."""
    assert compute_schedule([], START, DELIVERY, DUE, holidays=no_holidays) == []


def test_negative_estimate_is_rejected(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """Negative estimates are a fault."""
    with pytest.raises(InvalidInputError):
        compute_schedule(
            [make_task(estimate_days=-1)], START, DELIVERY, DUE, holidays=no_holidays
        )


def test_out_of_range_hours_are_rejected(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """Estimate hours stay within one working day."""
    with pytest.raises(InvalidInputError):
        compute_schedule(
            [make_task(estimate_hours=8)], START, DELIVERY, DUE, holidays=no_holidays
        )


def test_malformed_project_date_is_rejected(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """Governing dates must be YYYY-MM-DD."""
    with pytest.raises(InvalidInputError):
        compute_schedule(
            [make_task()], "06.01.2025", DELIVERY, DUE, holidays=no_holidays
        )


def test_recompute_uses_project_envelope(
    make_task: Callable[..., Task], no_holidays: HolidayTable
) -> None:
    """recompute reads dates and custom holidays from the project."""
    project = get_project_template("Site", pendulum.date(2025, 1, 6))
    project["custom_holidays"] = [pendulum.date(2025, 1, 7)]
    project["tasks"] = [make_task(estimate_days=1)]

    recomputed = recompute(project, holidays=no_holidays)

    assert recomputed["tasks"][0]["end_date"] == pendulum.date(2025, 1, 8)
    assert project["tasks"][0]["end_date"] is None


def test_progress_counts_completed_tasks(make_task: Callable[..., Task]) -> None:
    """Progress is the rounded share of completed tasks."""
    tasks = [make_task(completed=True), make_task(), make_task()]
    assert calculate_progress(tasks) == 33
    assert calculate_progress([make_task(completed=True), make_task()]) == 50
    assert calculate_progress([]) == 0
