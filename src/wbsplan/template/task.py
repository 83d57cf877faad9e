# SPDX-License-Identifier: MIT

from wbsplan.model.entity_id import generate_task_id
from wbsplan.model.task import (
    Assignee,
    ScheduleType,
    Task,
    TaskCategory,
    TaskStatus,
)
from wbsplan.model.task_tree import TreeTask, TreeTaskStatus

NEW_TASK_NAME = "New task"
NEW_SECTION_NAME_PREFIX = "New section"


def get_task_template(section: str, order_index: int = 0) -> Task:
    return {
        "id": generate_task_id(),
        "name": NEW_TASK_NAME,
        "section": section,
        "category": TaskCategory.PLANNING,
        "status": TaskStatus.PENDING,
        "assignee": Assignee.DIRECTOR,
        "estimate_days": 1,
        "estimate_hours": 0,
        "overtime_days": None,
        "overtime_hours": None,
        "is_outsourced": False,
        "schedule_type": ScheduleType.AUTO,
        "order_index": order_index,
        "start_date": None,
        "end_date": None,
        "countdown_to_due": None,
        "completed": False,
        "date_candidates": None,
    }


def create_new_section_name(existing_sections: list[str]) -> str:
    counter = 1
    new_name = f"{NEW_SECTION_NAME_PREFIX} {counter}"
    while new_name in existing_sections:
        counter += 1
        new_name = f"{NEW_SECTION_NAME_PREFIX} {counter}"
    return new_name


def get_tree_task_template(name: str) -> TreeTask:
    return {
        "id": generate_task_id(),
        "name": name,
        "status": TreeTaskStatus.PENDING,
        "assignee": "",
        "start_date": None,
        "duration": 0,
        "end_date": None,
    }
