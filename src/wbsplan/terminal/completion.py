# SPDX-License-Identifier: MIT

from wbsplan.repository.configuration import CONFIGURATION_REPO
from wbsplan.repository.project import PROJECT_REPO
from wbsplan.service.schedule import list_sections


def complete_project(incomplete: str) -> list[str]:
    """Return project names for shell completion."""
    all_projects = PROJECT_REPO.get_all_projects()
    return [
        project["name"]
        for project in all_projects
        if project["name"].startswith(incomplete)
    ]


def complete_section(incomplete: str) -> list[str]:
    """Return the active project's section names for shell completion."""
    active_project_id = CONFIGURATION_REPO.get_config()["active_project_id"]
    if active_project_id is None:
        return []
    for project in PROJECT_REPO.get_all_projects():
        if project["id"] == active_project_id:
            return [
                section
                for section in list_sections(project["tasks"])
                if section.startswith(incomplete)
            ]
    return []
