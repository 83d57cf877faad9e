# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from wbsplan.model.project import Project
from wbsplan.service.schedule import calculate_progress
from wbsplan.time import date_to_display_str
from wbsplan.view.views.header import header


def projects_view(projects: list[Project], active_project_id: Optional[str]) -> None:
    header(None, "projects")

    projects_table = Table(box=box.SIMPLE)
    projects_table.add_column("active")
    projects_table.add_column("id")
    projects_table.add_column("name")
    projects_table.add_column("client")
    projects_table.add_column("start")
    projects_table.add_column("delivery")
    projects_table.add_column("due")
    projects_table.add_column("tasks", justify="right")
    projects_table.add_column("progress", justify="right")

    for project in projects:
        projects_table.add_row(
            "*" if project["id"] == active_project_id else "",
            str(project["id"]),
            project["name"],
            project["client_name"],
            date_to_display_str(project["start_date"]),
            date_to_display_str(project["delivery_date"]),
            date_to_display_str(project["due_date"]),
            str(len(project["tasks"])),
            f"{calculate_progress(project['tasks'])}%",
        )

    console = Console()
    console.print(projects_table)


def single_project_view(project: Project) -> None:
    header(project["name"], "project")

    project_table = Table(box=box.SIMPLE)
    project_table.add_column("property")
    project_table.add_column("value")

    project_table.add_row("id", str(project["id"]))
    project_table.add_row("name", project["name"])
    project_table.add_row("client", project["client_name"])
    project_table.add_row("template", project["template"])
    for role, name in project["stakeholders"].items():
        if name:
            project_table.add_row(role, name)
    project_table.add_row("start", date_to_display_str(project["start_date"]))
    project_table.add_row("delivery", date_to_display_str(project["delivery_date"]))
    project_table.add_row("due", date_to_display_str(project["due_date"]))
    if len(project["custom_holidays"]) > 0:
        project_table.add_row(
            "custom holidays",
            ", ".join(
                date_to_display_str(holiday)
                for holiday in sorted(project["custom_holidays"])
            ),
        )
    if project["hourly_rate"] is not None:
        project_table.add_row("hourly rate", f"{project['hourly_rate']:,}")
    if project["total_budget"] is not None:
        project_table.add_row("budget", f"{project['total_budget']:,}")
    project_table.add_row("outsourcing cost", f"{project['outsourcing_cost']:,}")
    project_table.add_row("progress", f"{calculate_progress(project['tasks'])}%")
    project_table.add_row("created", project["created"].to_datetime_string())
    project_table.add_row("updated", project["updated"].to_datetime_string())

    console = Console()
    console.print(project_table)
