# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Iterable, Literal, Optional

import pendulum

from wbsplan import state
from wbsplan.exception import InvalidInputError
from wbsplan.holiday import HolidayTable
from wbsplan.model.entity_id import TaskId
from wbsplan.model.project import Project
from wbsplan.model.task import ScheduleType, Task
from wbsplan.service.business_day import (
    add_working_days_and_hours,
    count_working_days,
    next_working_day_on_or_after,
)
from wbsplan.service.task_field import apply_task_field_change, normalize_task
from wbsplan.service.util import round_half_up
from wbsplan.time import DateLike, to_date, to_date_optional, to_date_set

logger = logging.getLogger(__name__)

Direction = Literal["up", "down"]


def compute_schedule(
    tasks: list[Task],
    project_start: DateLike,
    delivery_date: DateLike,
    due_date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    now: Optional[DateLike] = None,
    holidays: Optional[HolidayTable] = None,
) -> list[Task]:
    """
    Compute start date, end date and countdown for every task.

    Tasks are walked once in order_index order with a cursor that starts at
    the project start:

    - AUTO tasks start on the first working day on or after the cursor and
      end after their estimate in working time
    - FIXED tasks with a start date keep it as-is (even on a non-working day)
      and end after their estimate; without a start date they behave as AUTO
    - COORDINATION tasks take the earliest candidate on or after the cursor
      as both start and end; without such a candidate they behave as AUTO

    After each task the cursor moves to the end date advanced by one working
    hour, whatever the task's schedule type. Later tasks are never pulled
    backwards. The countdown is measured against the delivery date; the due
    date and ``now`` do not influence the computed dates.

    Returns:
        New task records sorted by order_index. The input is not modified.

    Raises:
        InvalidInputError: for malformed dates or invalid task estimates
    """
    table = holidays if holidays is not None else state.get_holiday_table()
    holiday_dates = to_date_set(custom_holidays)
    project_start_date = to_date(project_start)
    delivery = to_date(delivery_date)
    to_date(due_date)
    to_date_optional(now)

    normalized_tasks = [normalize_task(task) for task in tasks]
    sorted_tasks = sorted(normalized_tasks, key=lambda task: task["order_index"])

    cursor = project_start_date
    calculated_tasks: list[Task] = []
    for task in sorted_tasks:
        task_start, task_end = _calculate_task_dates(task, cursor, holiday_dates, table)

        task["start_date"] = task_start
        task["end_date"] = task_end
        task["countdown_to_due"] = count_working_days(
            task_end, delivery, holiday_dates, table
        )
        calculated_tasks.append(task)

        cursor = add_working_days_and_hours(task_end, 0, 1, holiday_dates, table)

    return calculated_tasks


def _calculate_task_dates(
    task: Task,
    cursor: pendulum.Date,
    custom_holidays: frozenset[pendulum.Date],
    holidays: HolidayTable,
) -> tuple[pendulum.Date, pendulum.Date]:
    if task["schedule_type"] == ScheduleType.FIXED:
        fixed_start = task.get("start_date")
        if fixed_start is not None:
            fixed_end = add_working_days_and_hours(
                fixed_start,
                task["estimate_days"],
                task["estimate_hours"],
                custom_holidays,
                holidays,
            )
            return fixed_start, fixed_end
        logger.debug("FIXED task %s has no start date, scheduling as AUTO", task["id"])

    elif task["schedule_type"] == ScheduleType.COORDINATION:
        candidates = [
            candidate
            for candidate in task.get("date_candidates") or []
            if candidate >= cursor
        ]
        if len(candidates) > 0:
            chosen = min(candidates)
            return chosen, chosen
        logger.debug(
            "COORDINATION task %s has no candidate on or after %s, scheduling as AUTO",
            task["id"],
            cursor,
        )

    return _calculate_auto_dates(task, cursor, custom_holidays, holidays)


def _calculate_auto_dates(
    task: Task,
    cursor: pendulum.Date,
    custom_holidays: frozenset[pendulum.Date],
    holidays: HolidayTable,
) -> tuple[pendulum.Date, pendulum.Date]:
    start = next_working_day_on_or_after(cursor, custom_holidays, holidays)
    end = add_working_days_and_hours(
        start,
        task["estimate_days"],
        task["estimate_hours"],
        custom_holidays,
        holidays,
    )
    return start, end


def recompute(
    project: Project,
    now: Optional[DateLike] = None,
    holidays: Optional[HolidayTable] = None,
) -> Project:
    """Return a copy of the project with every task date recomputed."""
    recomputed_project = deepcopy(project)
    recomputed_project["tasks"] = compute_schedule(
        project["tasks"],
        project["start_date"],
        project["delivery_date"],
        project["due_date"],
        project["custom_holidays"],
        now,
        holidays,
    )
    return recomputed_project


def calculate_progress(tasks: list[Task]) -> int:
    """Percentage of completed tasks, by count rather than effort."""
    if len(tasks) == 0:
        return 0
    completed_count = len([task for task in tasks if task["completed"]])
    return round_half_up(completed_count / len(tasks) * 100)


def list_sections(tasks: list[Task]) -> list[str]:
    """Section names in order of first appearance."""
    sections: list[str] = []
    for task in _sorted_copy(tasks):
        if task["section"] not in sections:
            sections.append(task["section"])
    return sections


def _sorted_copy(tasks: list[Task]) -> list[Task]:
    return sorted(deepcopy(tasks), key=lambda task: task["order_index"])


def _renumber(tasks: list[Task]) -> list[Task]:
    for index, task in enumerate(tasks):
        task["order_index"] = index
    return tasks


def _find_index(tasks: list[Task], task_id: TaskId) -> int:
    for index, task in enumerate(tasks):
        if task["id"] == task_id:
            return index
    return -1


def _recompute_unchanged(
    ordered_tasks: list[Task],
    project_start: DateLike,
    delivery_date: DateLike,
    due_date: DateLike,
    custom_holidays: Iterable[DateLike],
    now: Optional[DateLike],
    holidays: Optional[HolidayTable],
) -> list[Task]:
    # No-op moves still return a computed collection
    return compute_schedule(
        _renumber(ordered_tasks),
        project_start,
        delivery_date,
        due_date,
        custom_holidays,
        now,
        holidays,
    )


def reorder_and_recalculate(
    tasks: list[Task],
    from_index: int,
    to_index: int,
    project_start: DateLike,
    delivery_date: DateLike,
    due_date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    now: Optional[DateLike] = None,
    holidays: Optional[HolidayTable] = None,
) -> list[Task]:
    """
    Move the task at ``from_index`` to ``to_index`` in the flat task order,
    renumber every task and recompute the schedule.

    Indexes are positions in order_index order, which is also the order the
    scheduler returns.
    """
    reordered_tasks = _sorted_copy(tasks)
    for index in (from_index, to_index):
        if not (0 <= index < len(reordered_tasks)):
            raise InvalidInputError(
                f"Position {index} is out of range for {len(reordered_tasks)} tasks"
            )

    moved_task = reordered_tasks.pop(from_index)
    reordered_tasks.insert(to_index, moved_task)

    return compute_schedule(
        _renumber(reordered_tasks),
        project_start,
        delivery_date,
        due_date,
        custom_holidays,
        now,
        holidays,
    )


def insert_task(
    tasks: list[Task],
    task: Task,
    project_start: DateLike,
    delivery_date: DateLike,
    due_date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    now: Optional[DateLike] = None,
    holidays: Optional[HolidayTable] = None,
) -> list[Task]:
    """
    Insert a task after the last task of its section, or at the end when the
    section is new, then renumber and recompute.
    """
    ordered_tasks = _sorted_copy(tasks)
    if _find_index(ordered_tasks, task["id"]) != -1:
        raise InvalidInputError(f"Task id {task['id']} already exists")

    insert_at = len(ordered_tasks)
    for index, existing_task in enumerate(ordered_tasks):
        if existing_task["section"] == task["section"]:
            insert_at = index + 1
    ordered_tasks.insert(insert_at, deepcopy(task))

    return compute_schedule(
        _renumber(ordered_tasks),
        project_start,
        delivery_date,
        due_date,
        custom_holidays,
        now,
        holidays,
    )


def delete_task(
    tasks: list[Task],
    task_id: TaskId,
    project_start: DateLike,
    delivery_date: DateLike,
    due_date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    now: Optional[DateLike] = None,
    holidays: Optional[HolidayTable] = None,
) -> list[Task]:
    remaining_tasks = [task for task in _sorted_copy(tasks) if task["id"] != task_id]
    if len(remaining_tasks) == len(tasks):
        logger.warning("Task %s not found, nothing deleted", task_id)

    return compute_schedule(
        _renumber(remaining_tasks),
        project_start,
        delivery_date,
        due_date,
        custom_holidays,
        now,
        holidays,
    )


def move_task_in_section(
    tasks: list[Task],
    task_id: TaskId,
    direction: Direction,
    project_start: DateLike,
    delivery_date: DateLike,
    due_date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    now: Optional[DateLike] = None,
    holidays: Optional[HolidayTable] = None,
) -> list[Task]:
    """
    Move a task one step up or down among the tasks of its own section.

    Moving past the first or last task of the section leaves the order
    unchanged; the schedule is still recomputed.
    """
    ordered_tasks = _sorted_copy(tasks)
    task_index = _find_index(ordered_tasks, task_id)
    if task_index == -1:
        logger.warning("Task %s not found, nothing moved", task_id)
        return _recompute_unchanged(
            ordered_tasks,
            project_start,
            delivery_date,
            due_date,
            custom_holidays,
            now,
            holidays,
        )

    section = ordered_tasks[task_index]["section"]
    section_tasks = [task for task in ordered_tasks if task["section"] == section]
    section_index = _find_index(section_tasks, task_id)

    if direction == "up" and section_index > 0:
        target_task = section_tasks[section_index - 1]
    elif direction == "down" and section_index < len(section_tasks) - 1:
        target_task = section_tasks[section_index + 1]
    else:
        return _recompute_unchanged(
            ordered_tasks,
            project_start,
            delivery_date,
            due_date,
            custom_holidays,
            now,
            holidays,
        )

    return reorder_and_recalculate(
        ordered_tasks,
        task_index,
        _find_index(ordered_tasks, target_task["id"]),
        project_start,
        delivery_date,
        due_date,
        custom_holidays,
        now,
        holidays,
    )


def move_section(
    tasks: list[Task],
    section: str,
    direction: Direction,
    project_start: DateLike,
    delivery_date: DateLike,
    due_date: DateLike,
    custom_holidays: Iterable[DateLike] = (),
    now: Optional[DateLike] = None,
    holidays: Optional[HolidayTable] = None,
) -> list[Task]:
    """
    Swap a whole section with its neighbouring section.

    Sections are ordered by first appearance; each one moves as a block and
    keeps its internal task order.
    """
    ordered_tasks = _sorted_copy(tasks)
    sections = list_sections(ordered_tasks)
    if section not in sections:
        logger.warning("Section %s not found, nothing moved", section)
        return _recompute_unchanged(
            ordered_tasks,
            project_start,
            delivery_date,
            due_date,
            custom_holidays,
            now,
            holidays,
        )

    current_index = sections.index(section)
    if direction == "up" and current_index > 0:
        target_index = current_index - 1
    elif direction == "down" and current_index < len(sections) - 1:
        target_index = current_index + 1
    else:
        return _recompute_unchanged(
            ordered_tasks,
            project_start,
            delivery_date,
            due_date,
            custom_holidays,
            now,
            holidays,
        )

    sections[current_index], sections[target_index] = (
        sections[target_index],
        sections[current_index],
    )
    reordered_tasks = [
        task
        for section_name in sections
        for task in ordered_tasks
        if task["section"] == section_name
    ]

    return compute_schedule(
        _renumber(reordered_tasks),
        project_start,
        delivery_date,
        due_date,
        custom_holidays,
        now,
        holidays,
    )


def set_section_completed(
    tasks: list[Task], section: str, completed: bool
) -> list[Task]:
    """Mark every task of a section as completed or not completed."""
    updated_tasks: list[Task] = []
    for task in _sorted_copy(tasks):
        if task["section"] == section and task["completed"] != completed:
            task = apply_task_field_change(task, "completed", completed)
        updated_tasks.append(task)
    return updated_tasks
