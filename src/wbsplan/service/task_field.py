# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Callable

from wbsplan.exception import InvalidInputError
from wbsplan.model.task import (
    Assignee,
    ScheduleType,
    Task,
    TaskCategory,
    TaskStatus,
)
from wbsplan.time import to_date, to_date_optional


def _validate_choice(field: str, choices: tuple[str, ...]) -> Callable[[Any], str]:
    def validate(value: Any) -> str:
        if value not in choices:
            raise InvalidInputError(
                f"{field} must be one of {', '.join(choices)}, got '{value}'"
            )
        return str(value)

    return validate


def _validate_non_negative_int(field: str) -> Callable[[Any], int]:
    def validate(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidInputError(f"{field} must be a non-negative integer")
        return value

    return validate


def _validate_optional_non_negative_int(field: str) -> Callable[[Any], Any]:
    validate_int = _validate_non_negative_int(field)

    def validate(value: Any) -> Any:
        if value is None:
            return None
        return validate_int(value)

    return validate


def _validate_hours(field: str) -> Callable[[Any], int]:
    validate_int = _validate_non_negative_int(field)

    def validate(value: Any) -> int:
        hours = validate_int(value)
        if hours > 7:
            raise InvalidInputError(f"{field} must be between 0 and 7, got {hours}")
        return hours

    return validate


def _validate_optional_hours(field: str) -> Callable[[Any], Any]:
    validate_hours = _validate_hours(field)

    def validate(value: Any) -> Any:
        if value is None:
            return None
        return validate_hours(value)

    return validate


def _validate_text(field: str) -> Callable[[Any], str]:
    def validate(value: Any) -> str:
        if not isinstance(value, str) or value.strip() == "":
            raise InvalidInputError(f"{field} must be a non-empty string")
        return value

    return validate


def _validate_bool(field: str) -> Callable[[Any], bool]:
    def validate(value: Any) -> bool:
        if not isinstance(value, bool):
            raise InvalidInputError(f"{field} must be true or false")
        return value

    return validate


def _validate_candidates(value: Any) -> Any:
    if value is None:
        return None
    return sorted({to_date(candidate) for candidate in value})


_FIELD_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "name": _validate_text("name"),
    "section": _validate_text("section"),
    "category": _validate_choice("category", TaskCategory.ALL),
    "status": _validate_choice("status", TaskStatus.ALL),
    "assignee": _validate_choice("assignee", Assignee.ALL),
    "estimate_days": _validate_non_negative_int("estimate_days"),
    "estimate_hours": _validate_hours("estimate_hours"),
    "overtime_days": _validate_optional_non_negative_int("overtime_days"),
    "overtime_hours": _validate_optional_hours("overtime_hours"),
    "is_outsourced": _validate_bool("is_outsourced"),
    "schedule_type": _validate_choice("schedule_type", ScheduleType.ALL),
    "order_index": _validate_non_negative_int("order_index"),
    "start_date": to_date_optional,
    "end_date": to_date_optional,
    "completed": _validate_bool("completed"),
    "date_candidates": _validate_candidates,
}


_REQUIRED_SCHEDULING_FIELDS = (
    "estimate_days",
    "estimate_hours",
    "schedule_type",
    "order_index",
)
_OPTIONAL_SCHEDULING_FIELDS = (
    "overtime_days",
    "overtime_hours",
    "start_date",
    "date_candidates",
)


def normalize_task(task: Task) -> Task:
    """
    Return a copy of the task with its scheduling inputs validated.

    Date strings become pendulum.Date values and candidates are sorted and
    deduplicated.

    Raises:
        InvalidInputError: when a scheduling field is missing or invalid
    """
    normalized_task = deepcopy(task)
    for field in _REQUIRED_SCHEDULING_FIELDS:
        if field not in normalized_task:
            raise InvalidInputError(f"Task {task.get('id')} is missing '{field}'")
        normalized_task[field] = _FIELD_VALIDATORS[field](normalized_task[field])  # type: ignore[literal-required]
    for field in _OPTIONAL_SCHEDULING_FIELDS:
        if field in normalized_task:
            normalized_task[field] = _FIELD_VALIDATORS[field](normalized_task[field])  # type: ignore[literal-required]
    return normalized_task


def apply_task_field_change(task: Task, field: str, value: Any) -> Task:
    """
    Return a copy of the task with one field changed.

    The status and completed fields move together:

    - completed=True forces status Done, completed=False forces In Progress
    - status Done forces completed=True, any other status forces False

    Raises:
        InvalidInputError: for unknown or immutable fields and invalid values
    """
    if field not in _FIELD_VALIDATORS:
        raise InvalidInputError(f"Field '{field}' cannot be changed")

    updated_task = deepcopy(task)
    validated_value = _FIELD_VALIDATORS[field](value)
    updated_task[field] = validated_value  # type: ignore[literal-required]

    if field == "completed":
        updated_task["status"] = (
            TaskStatus.DONE if validated_value else TaskStatus.IN_PROGRESS
        )
    elif field == "status":
        updated_task["completed"] = validated_value == TaskStatus.DONE

    return updated_task


def apply_task_field_changes(task: Task, changes: dict[str, Any]) -> Task:
    """Apply several field changes in order; later changes win on conflicts."""
    updated_task = task
    for field, value in changes.items():
        updated_task = apply_task_field_change(updated_task, field, value)
    return updated_task
