"""Tests for the financial projector."""

from typing import Callable

import pendulum

from wbsplan.model.task import Task
from wbsplan.service.financial import (
    calculate_project_financials,
    effective_hourly_rate,
    project_financials,
)
from wbsplan.template.project import get_project_template


def test_completed_task_at_full_progress(make_task: Callable[..., Task]) -> None:
    """One completed 8-hour task at 8,000 per hour costs 64,000."""
    task = make_task(estimate_days=1, estimate_hours=0, completed=True)

    result = calculate_project_financials([task], 8000, 1_000_000, 0)

    assert result["actual_cost"] == 64_000
    assert result["predicted_total_cost"] == result["actual_cost"]
    assert result["estimated_hours"] == 8
    assert result["total_actual_hours"] == 8
    assert not result["is_deficit_risk"]
    assert not result["is_current_deficit"]
    assert result["affordable_hours"] == 117
    assert result["affordable_days"] == 14
    assert result["affordable_remaining_hours"] == 5


def test_prediction_extrapolates_from_progress(make_task: Callable[..., Task]) -> None:
    """Half the tasks done at cost X predicts 2X."""
    tasks = [
        make_task(estimate_days=1, completed=True),
        make_task(estimate_days=1),
    ]

    result = calculate_project_financials(tasks, 1000, 10_000)

    assert result["actual_cost"] == 8000
    assert result["predicted_total_cost"] == 16_000
    assert result["is_deficit_risk"]
    assert not result["is_current_deficit"]


def test_low_progress_does_not_extrapolate(make_task: Callable[..., Task]) -> None:
    """Below five percent the actual cost is the prediction."""
    tasks = [make_task(estimate_days=1, completed=True)] + [
        make_task(estimate_days=1) for _ in range(24)
    ]

    result = calculate_project_financials(tasks, 1000)

    assert result["predicted_total_cost"] == result["actual_cost"] == 8000


def test_overtime_counts_for_open_tasks(make_task: Callable[..., Task]) -> None:
    """Overtime adds actual hours even before completion."""
    task = make_task(estimate_days=2, overtime_days=0, overtime_hours=3)

    result = calculate_project_financials([task], 100, None, 500)

    assert result["total_actual_hours"] == 3
    assert result["actual_cost"] == 800
    assert result["estimated_cost"] == 2100


def test_no_budget_means_no_deficit_and_no_affordable_time(
    make_task: Callable[..., Task],
) -> None:
    """Without a budget the flags stay off."""
    result = calculate_project_financials([make_task(completed=True)], 1000)

    assert not result["is_deficit_risk"]
    assert not result["is_current_deficit"]
    assert result["affordable_hours"] == 0


def test_zero_rate_has_no_affordable_time(make_task: Callable[..., Task]) -> None:
    """A zero hourly rate must not divide by zero."""
    result = calculate_project_financials([make_task()], 0, 1000)

    assert result["affordable_hours"] == 0


def test_over_budget_gives_negative_affordable_time(
    make_task: Callable[..., Task],
) -> None:
    """Spending past the budget leaves negative hours."""
    task = make_task(estimate_days=2, completed=True)

    result = calculate_project_financials([task], 1000, 10_000)

    assert result["is_current_deficit"]
    assert result["affordable_hours"] == -6
    assert result["affordable_days"] * 8 + result["affordable_remaining_hours"] == -6


def test_effective_hourly_rate() -> None:
    """In-house budget spread over the estimated hours."""
    assert effective_hourly_rate(1_000_000, 200_000, 100, 5000) == 8000
    assert effective_hourly_rate(None, 0, 100, 5000) == 5000
    assert effective_hourly_rate(1_000_000, 0, 0, 5000) == 5000


def test_project_financials_derives_rate(make_task: Callable[..., Task]) -> None:
    """Projects without an hourly rate use the effective rate."""
    project = get_project_template("Site", pendulum.date(2025, 1, 6))
    project["total_budget"] = 160_000
    project["tasks"] = [make_task(estimate_days=2, completed=True)]

    result = project_financials(project, 5000)

    assert result["actual_cost"] == 160_000
    assert not result["is_current_deficit"]


def test_zero_budget_counts_as_no_budget(make_task: Callable[..., Task]) -> None:
    """A budget of 0 raises no deficit flags and leaves no affordable time."""
    task = make_task(estimate_days=1, estimate_hours=0, completed=True)

    result = calculate_project_financials([task], 8000, 0, 0)

    assert not result["is_deficit_risk"]
    assert not result["is_current_deficit"]
    assert result["affordable_hours"] == 0
    assert result["affordable_days"] == 0
    assert result["affordable_remaining_hours"] == 0
    assert effective_hourly_rate(0, 0, 100, 5000) == 5000


def test_costs_are_not_rounded(make_task: Callable[..., Task]) -> None:
    """Actual and estimated cost keep fractional rates; the prediction is rounded."""
    tasks = [
        make_task(estimate_days=0, estimate_hours=2, completed=True),
        make_task(estimate_days=0, estimate_hours=2, completed=True),
    ]

    result = calculate_project_financials(tasks, 100.25, 401)

    assert result["actual_cost"] == 401.0
    assert result["estimated_cost"] == 401.0
    assert result["predicted_total_cost"] == 401
    assert not result["is_current_deficit"]

    over_budget = calculate_project_financials(tasks, 100.25, 400.5)

    assert over_budget["actual_cost"] == 401.0
    assert over_budget["is_current_deficit"]
