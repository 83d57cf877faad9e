# SPDX-License-Identifier: MIT

import logging

from wbsplan.exception import InvalidInputError
from wbsplan.model.entity_id import ProjectId, TaskId
from wbsplan.model.project import Project
from wbsplan.repository.configuration import CONFIGURATION_REPO
from wbsplan.repository.project import PROJECT_REPO
from wbsplan.service.schedule import recompute

logger = logging.getLogger(__name__)


def resolve_project_id(reference: str) -> ProjectId:
    """
    Find a project by full id, unique id prefix or exact name.

    Raises:
        InvalidInputError: when nothing or more than one project matches
    """
    projects = PROJECT_REPO.get_all_projects()
    for project in projects:
        if project["id"] == reference:
            return reference

    matches = [
        project
        for project in projects
        if str(project["id"]).startswith(reference) or project["name"] == reference
    ]
    if len(matches) == 0:
        raise InvalidInputError(f"No project matches '{reference}'")
    if len(matches) > 1:
        raise InvalidInputError(f"'{reference}' matches more than one project")
    return str(matches[0]["id"])


def get_active_project() -> Project:
    active_project_id = CONFIGURATION_REPO.get_config()["active_project_id"]
    if active_project_id is None:
        raise InvalidInputError(
            "No active project, create one or select one with 'project use'"
        )
    return PROJECT_REPO.get_project(active_project_id)


def save_recomputed_project(project: Project) -> Project:
    """Recompute every task date and store the result."""
    recomputed_project = recompute(project)
    PROJECT_REPO.update_project(recomputed_project)
    logger.debug("Recomputed %d task(s)", len(recomputed_project["tasks"]))
    return PROJECT_REPO.get_project(str(recomputed_project["id"]))


def resolve_task_number(project: Project, number: int) -> TaskId:
    """Map the 1-based row number shown in the schedule view to a task id."""
    tasks = sorted(project["tasks"], key=lambda task: task["order_index"])
    if not (1 <= number <= len(tasks)):
        raise InvalidInputError(
            f"Task number {number} is out of range (1-{len(tasks)})"
        )
    return tasks[number - 1]["id"]
