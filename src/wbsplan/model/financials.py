# SPDX-License-Identifier: MIT

from typing import TypedDict


class ProjectFinancials(TypedDict):
    estimated_cost: float
    actual_cost: float
    estimated_hours: int
    total_actual_hours: int
    predicted_total_cost: int
    is_deficit_risk: bool
    is_current_deficit: bool
    affordable_hours: int
    affordable_days: int
    affordable_remaining_hours: int
