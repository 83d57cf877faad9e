# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum

from wbsplan.model.entity_id import TaskId


class ScheduleType:
    AUTO = "AUTO"
    FIXED = "FIXED"
    COORDINATION = "COORDINATION"

    ALL = (AUTO, FIXED, COORDINATION)


class TaskCategory:
    PLANNING = "Planning"
    DESIGN = "Design"
    DEVELOPMENT = "Development"
    QA = "QA"
    LAUNCH = "Launch"

    ALL = (PLANNING, DESIGN, DEVELOPMENT, QA, LAUNCH)


class TaskStatus:
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    DONE = "Done"

    ALL = (PENDING, IN_PROGRESS, REVIEW, DONE)


class Assignee:
    DIRECTOR = "Director"
    AGENCY = "Agency"
    CLIENT = "Client"

    ALL = (DIRECTOR, AGENCY, CLIENT)


HOURS_PER_DAY = 8


class Task(TypedDict):
    id: TaskId
    name: str
    section: str
    category: str
    status: str
    assignee: str
    estimate_days: int
    estimate_hours: int
    overtime_days: NotRequired[Optional[int]]
    overtime_hours: NotRequired[Optional[int]]
    is_outsourced: NotRequired[bool]
    schedule_type: str
    order_index: int
    start_date: Optional[pendulum.Date]
    end_date: Optional[pendulum.Date]
    countdown_to_due: Optional[int]
    completed: bool
    date_candidates: NotRequired[Optional[list[pendulum.Date]]]
