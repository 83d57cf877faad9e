# SPDX-License-Identifier: MIT

import math
from typing import Optional

from wbsplan.model.financials import ProjectFinancials
from wbsplan.model.project import Project
from wbsplan.model.task import HOURS_PER_DAY, Task
from wbsplan.service.schedule import calculate_progress
from wbsplan.service.util import round_half_up

# Below this progress a linear extrapolation is too noisy to be useful.
MIN_PROGRESS_FOR_PREDICTION = 5


def estimated_task_hours(task: Task) -> int:
    return task["estimate_days"] * HOURS_PER_DAY + task["estimate_hours"]


def overtime_task_hours(task: Task) -> int:
    return (task.get("overtime_days") or 0) * HOURS_PER_DAY + (
        task.get("overtime_hours") or 0
    )


def total_estimated_hours(tasks: list[Task]) -> int:
    return sum(estimated_task_hours(task) for task in tasks)


def calculate_project_financials(
    tasks: list[Task],
    hourly_rate: float,
    total_budget: Optional[float] = None,
    base_outsourcing_cost: float = 0,
) -> ProjectFinancials:
    """
    Project actual and final cost from task completion.

    Completed tasks count their full estimate as actual hours, open tasks
    count nothing; overtime always counts. The final cost is extrapolated
    linearly from the completion percentage while it is between 5 and 100
    percent. Only the predicted cost is rounded.
    """
    estimated_hours = 0
    actual_hours = 0
    for task in tasks:
        task_hours = estimated_task_hours(task)
        estimated_hours += task_hours
        if task["completed"]:
            actual_hours += task_hours
        actual_hours += overtime_task_hours(task)

    actual_cost = actual_hours * hourly_rate + base_outsourcing_cost

    progress = calculate_progress(tasks)
    predicted_total_cost = actual_cost
    if MIN_PROGRESS_FOR_PREDICTION < progress < 100:
        predicted_total_cost = actual_cost / (progress / 100)

    is_deficit_risk = False
    is_current_deficit = False
    affordable_hours = 0
    # A zero budget counts as no budget
    if total_budget:
        is_deficit_risk = predicted_total_cost > total_budget
        is_current_deficit = actual_cost > total_budget
        if hourly_rate > 0:
            affordable_hours = math.floor((total_budget - actual_cost) / hourly_rate)
    affordable_days, affordable_remaining_hours = divmod(
        affordable_hours, HOURS_PER_DAY
    )

    return {
        "estimated_cost": estimated_hours * hourly_rate + base_outsourcing_cost,
        "actual_cost": actual_cost,
        "estimated_hours": estimated_hours,
        "total_actual_hours": actual_hours,
        "predicted_total_cost": round_half_up(predicted_total_cost),
        "is_deficit_risk": is_deficit_risk,
        "is_current_deficit": is_current_deficit,
        "affordable_hours": affordable_hours,
        "affordable_days": affordable_days,
        "affordable_remaining_hours": affordable_remaining_hours,
    }


def effective_hourly_rate(
    total_budget: Optional[float],
    outsourcing_cost: float,
    total_estimated_hours: int,
    fallback_rate: int,
) -> int:
    """Hourly rate that spends the in-house budget over the estimated hours."""
    if not total_budget or total_estimated_hours <= 0:
        return fallback_rate
    return round_half_up((total_budget - outsourcing_cost) / total_estimated_hours)


def project_financials(project: Project, fallback_rate: int) -> ProjectFinancials:
    hourly_rate = project["hourly_rate"]
    if hourly_rate is None:
        hourly_rate = effective_hourly_rate(
            project["total_budget"],
            project["outsourcing_cost"],
            total_estimated_hours(project["tasks"]),
            fallback_rate,
        )
    return calculate_project_financials(
        project["tasks"],
        hourly_rate,
        project["total_budget"],
        project["outsourcing_cost"],
    )
