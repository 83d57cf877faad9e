# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from wbsplan.model.entity_id import ProjectId
from wbsplan.model.task import Task
from wbsplan.model.task_tree import TreeTask


class Stakeholders(TypedDict):
    director: str
    agency: str
    client: str


class Project(TypedDict):
    id: Optional[ProjectId]
    name: str
    client_name: str
    template: str
    stakeholders: Stakeholders
    created: pendulum.DateTime
    updated: pendulum.DateTime
    start_date: pendulum.Date
    delivery_date: pendulum.Date
    due_date: pendulum.Date
    custom_holidays: list[pendulum.Date]
    hourly_rate: Optional[int]
    total_budget: Optional[int]
    outsourcing_cost: int
    tasks: list[Task]
    tree_tasks: list[TreeTask]
