# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Iterator, Optional

import pendulum

from wbsplan.exception import InvalidInputError
from wbsplan.model.task_tree import StatusChangeProposal, TreeTask, TreeTaskStatus
from wbsplan.service.business_day import is_weekend
from wbsplan.service.util import round_half_up
from wbsplan.time import DateLike, to_date_optional

logger = logging.getLogger(__name__)

PARENT_STARTS_LATE_MESSAGE = "Parent task starts after one of its subtasks"
PARENT_ENDS_EARLY_MESSAGE = "Parent task ends before one of its subtasks"


def _walk(tasks: list[TreeTask], level: int = 0) -> Iterator[tuple[int, TreeTask]]:
    for task in tasks:
        yield level, task
        yield from _walk(task.get("children") or [], level + 1)


def flatten_tree(tasks: list[TreeTask]) -> list[tuple[int, TreeTask]]:
    """Depth-first list of (nesting level, task), parents before children."""
    return list(_walk(tasks))


def calculate_tree_progress(tasks: list[TreeTask]) -> int:
    """Percentage of completed nodes, parents and subtasks counted alike."""
    all_tasks = [task for _, task in _walk(tasks)]
    if len(all_tasks) == 0:
        return 0
    completed_count = len(
        [task for task in all_tasks if task["status"] == TreeTaskStatus.COMPLETED]
    )
    return round_half_up(completed_count / len(all_tasks) * 100)


def calculate_tree_end_date(
    start_date: Optional[DateLike], duration: Optional[int]
) -> Optional[pendulum.Date]:
    """
    End date ``duration`` weekdays after the start date.

    The start day itself is not counted and only weekends are skipped;
    regional holidays do not apply to tree tasks.
    """
    start = to_date_optional(start_date)
    if start is None or duration is None or duration <= 0:
        return None

    current = start
    days_added = 0
    while days_added < duration:
        current = current.add(days=1)
        if not is_weekend(current):
            days_added += 1
    return current


def validate_tree_dates(task: TreeTask) -> tuple[bool, str]:
    """Check that a parent's date window covers the windows of its direct subtasks."""
    child_windows = [
        (child["start_date"], child["end_date"])
        for child in task.get("children") or []
        if child.get("start_date") is not None and child.get("end_date") is not None
    ]
    if len(child_windows) == 0:
        return True, ""

    earliest_child_start = min(start for start, _ in child_windows)
    latest_child_end = max(end for _, end in child_windows)

    parent_start = task.get("start_date")
    parent_end = task.get("end_date")
    if parent_start is not None and parent_start > earliest_child_start:
        return False, PARENT_STARTS_LATE_MESSAGE
    if parent_end is not None and parent_end < latest_child_end:
        return False, PARENT_ENDS_EARLY_MESSAGE
    return True, ""


def next_status(status: str) -> str:
    if status not in TreeTaskStatus.CYCLE:
        raise InvalidInputError(f"Unknown tree task status: {status}")
    index = TreeTaskStatus.CYCLE.index(status)
    return TreeTaskStatus.CYCLE[(index + 1) % len(TreeTaskStatus.CYCLE)]


def find_tree_task(tasks: list[TreeTask], task_id: str) -> Optional[TreeTask]:
    for _, task in _walk(tasks):
        if task["id"] == task_id:
            return task
    return None


def propose_status_change(
    tasks: list[TreeTask], task_id: str, status: str
) -> StatusChangeProposal:
    """
    First phase of a status change.

    Completing a task that still has incomplete descendants needs the
    caller's confirmation before the descendants are completed as well; the
    proposal lists them so the caller can ask.
    """
    if status not in TreeTaskStatus.CYCLE:
        raise InvalidInputError(f"Unknown tree task status: {status}")
    task = find_tree_task(tasks, task_id)
    if task is None:
        raise InvalidInputError(f"Tree task {task_id} not found")

    incomplete_descendant_ids: list[str] = []
    if status == TreeTaskStatus.COMPLETED:
        incomplete_descendant_ids = [
            descendant["id"]
            for _, descendant in _walk(task.get("children") or [])
            if descendant["status"] != TreeTaskStatus.COMPLETED
        ]

    return {
        "task_id": task_id,
        "status": status,
        "requires_confirmation": len(incomplete_descendant_ids) > 0,
        "incomplete_descendant_ids": incomplete_descendant_ids,
    }


def apply_status_change(
    tasks: list[TreeTask], proposal: StatusChangeProposal, cascade: bool
) -> list[TreeTask]:
    """
    Second phase of a status change.

    The task itself always takes the proposed status. Descendants are only
    completed too when the proposal asked for confirmation and ``cascade``
    confirms it.
    """
    updated_tasks = deepcopy(tasks)
    task = find_tree_task(updated_tasks, proposal["task_id"])
    if task is None:
        raise InvalidInputError(f"Tree task {proposal['task_id']} not found")

    task["status"] = proposal["status"]
    if proposal["requires_confirmation"] and cascade:
        for _, descendant in _walk(task.get("children") or []):
            descendant["status"] = TreeTaskStatus.COMPLETED
        logger.debug("Completed all subtasks of %s", proposal["task_id"])
    return updated_tasks


def update_tree_task(
    tasks: list[TreeTask], task_id: str, updates: dict[str, Any]
) -> list[TreeTask]:
    """
    Apply field updates to one tree task.

    A change to ``start_date`` or ``duration`` recomputes ``end_date``.
    Status changes go through propose_status_change/apply_status_change.
    """
    if "status" in updates:
        raise InvalidInputError(
            "Use propose_status_change and apply_status_change to change a status"
        )
    if "id" in updates or "children" in updates:
        raise InvalidInputError("Tree task id and children cannot be updated")

    updated_tasks = deepcopy(tasks)
    task = find_tree_task(updated_tasks, task_id)
    if task is None:
        raise InvalidInputError(f"Tree task {task_id} not found")

    for field, value in updates.items():
        if field not in TreeTask.__annotations__:
            raise InvalidInputError(f"Unknown tree task field: {field}")
        if field in ("start_date", "end_date"):
            value = to_date_optional(value)
        task[field] = value  # type: ignore[literal-required]

    if "start_date" in updates or "duration" in updates:
        task["end_date"] = calculate_tree_end_date(
            task.get("start_date"), task.get("duration") or 0
        )
    return updated_tasks


def add_tree_task(
    tasks: list[TreeTask], task: TreeTask, parent_id: Optional[str] = None
) -> list[TreeTask]:
    """Append a task at the top level or as the last subtask of ``parent_id``."""
    updated_tasks = deepcopy(tasks)
    if find_tree_task(updated_tasks, task["id"]) is not None:
        raise InvalidInputError(f"Tree task id {task['id']} already exists")

    if parent_id is None:
        updated_tasks.append(deepcopy(task))
        return updated_tasks

    parent = find_tree_task(updated_tasks, parent_id)
    if parent is None:
        raise InvalidInputError(f"Tree task {parent_id} not found")
    parent.setdefault("children", []).append(deepcopy(task))
    return updated_tasks


def _remove_subtree(tasks: list[TreeTask], task_id: str) -> bool:
    for index, task in enumerate(tasks):
        if task["id"] == task_id:
            del tasks[index]
            return True
        if _remove_subtree(task.get("children") or [], task_id):
            return True
    return False


def delete_tree_task(tasks: list[TreeTask], task_id: str) -> list[TreeTask]:
    """Remove a task together with all of its subtasks."""
    updated_tasks = deepcopy(tasks)
    if not _remove_subtree(updated_tasks, task_id):
        raise InvalidInputError(f"Tree task {task_id} not found")
    return updated_tasks


def tree_task_id_at(tasks: list[TreeTask], number: int) -> str:
    """Map the 1-based row number of the depth-first tree view to a task id."""
    flat_tasks = flatten_tree(tasks)
    if not (1 <= number <= len(flat_tasks)):
        raise InvalidInputError(
            f"Tree row {number} is out of range (1-{len(flat_tasks)})"
        )
    return flat_tasks[number - 1][1]["id"]
