# SPDX-License-Identifier: MIT

from typing import Callable, Optional

import typer

from wbsplan.exception import InvalidInputError
from wbsplan.holiday import load_holiday_table
from wbsplan.model.task import Assignee, ScheduleType, TaskCategory, TaskStatus
from wbsplan.model.task_tree import TreeTaskStatus
from wbsplan.template.wbs import TemplateKey


def _validate_choice(
    label: str, choices: tuple[str, ...]
) -> Callable[[Optional[str]], Optional[str]]:
    def validate(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        # Accept any capitalisation and return the canonical spelling
        for choice in choices:
            if choice.lower() == value.lower():
                return choice
        raise typer.BadParameter(
            f"{label} must be one of: {', '.join(choices)} (got '{value}')"
        )

    return validate


validate_category = _validate_choice("Category", TaskCategory.ALL)
validate_status = _validate_choice("Status", TaskStatus.ALL)
validate_assignee = _validate_choice("Assignee", Assignee.ALL)
validate_schedule_type = _validate_choice("Schedule type", ScheduleType.ALL)
validate_template = _validate_choice("Template", TemplateKey.ALL)
validate_tree_status = _validate_choice("Tree status", TreeTaskStatus.CYCLE)


def validate_non_negative(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    if value < 0:
        raise typer.BadParameter("Value must not be negative")
    return value


def validate_positive(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    if value <= 0:
        raise typer.BadParameter("Value must be greater than zero")
    return value


def validate_holiday_region(region: Optional[str]) -> Optional[str]:
    if region is None:
        return None
    try:
        load_holiday_table(region)
    except InvalidInputError as e:
        raise typer.BadParameter(str(e))
    return region
