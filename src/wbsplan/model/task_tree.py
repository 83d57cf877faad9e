# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum


class TreeTaskStatus:
    PENDING = "pending"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"

    CYCLE = (PENDING, IN_PROGRESS, COMPLETED)


class TreeTask(TypedDict):
    id: str
    name: str
    status: str
    assignee: str
    start_date: Optional[pendulum.Date]
    duration: int
    end_date: Optional[pendulum.Date]
    children: NotRequired[list["TreeTask"]]


class StatusChangeProposal(TypedDict):
    task_id: str
    status: str
    requires_confirmation: bool
    incomplete_descendant_ids: list[str]
