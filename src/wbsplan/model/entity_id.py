# SPDX-License-Identifier: MIT

import uuid
from typing import TypeAlias

TaskId: TypeAlias = str
ProjectId: TypeAlias = str


def generate_task_id() -> TaskId:
    return str(uuid.uuid4())


def generate_project_id() -> ProjectId:
    return str(uuid.uuid4())
