# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from wbsplan.repository.configuration import CONFIGURATION_REPO
from wbsplan.repository.project import PROJECT_REPO
from wbsplan.service.export import export_tasks_csv
from wbsplan.service.financial import (
    effective_hourly_rate,
    project_financials,
    total_estimated_hours,
)
from wbsplan.service.generator import generate_tasks_from_text
from wbsplan.service.project import (
    get_active_project,
    resolve_project_id,
    save_recomputed_project,
)
from wbsplan.service.validation import validate_schedule
from wbsplan.template.project import get_project_template
from wbsplan.template.wbs import TemplateKey, generate_wbs
from wbsplan.terminal.completion import complete_project
from wbsplan.terminal.custom_typer import AliasedTyperGroup
from wbsplan.terminal.error import exit_on_invalid_input
from wbsplan.terminal.parse import parse_date
from wbsplan.terminal.validate import validate_non_negative, validate_template
from wbsplan.time import date_to_str
from wbsplan.view.views.financial import financial_view
from wbsplan.view.views.project import projects_view, single_project_view
from wbsplan.view.views.schedule import schedule_view
from wbsplan.view.views.validation import validation_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def show_schedule(project_id: str) -> None:
    project = PROJECT_REPO.get_project(project_id)
    schedule_view(project)
    validation_view(
        validate_schedule(
            project["tasks"],
            project["delivery_date"],
            project["due_date"],
            project["custom_holidays"],
        )
    )


@app.command("create, c", no_args_is_help=True)
def create(
    name: str,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    delivery: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--delivery",
            "-d",
            parser=parse_date,
            help="internal delivery target, " + DATE_HELP,
        ),
    ] = None,
    due: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--due", "-u", parser=parse_date, help="contractual due date, " + DATE_HELP
        ),
    ] = None,
    template: Annotated[
        str,
        typer.Option(
            "--template",
            "-t",
            callback=validate_template,
            help=f"valid input: {', '.join(TemplateKey.ALL)}",
        ),
    ] = TemplateKey.WEB_SITE,
    requirements: Annotated[
        Optional[str],
        typer.Option(
            "--requirements",
            "-r",
            help="free-text requirements; picks the template and extra tasks from keywords",
        ),
    ] = None,
    client_name: Annotated[Optional[str], typer.Option("--client", "-cl")] = None,
    director: Annotated[Optional[str], typer.Option("--director")] = None,
    agency: Annotated[Optional[str], typer.Option("--agency")] = None,
    client_contact: Annotated[Optional[str], typer.Option("--client-contact")] = None,
    total_budget: Annotated[
        Optional[int],
        typer.Option("--budget", "-b", callback=validate_non_negative),
    ] = None,
    hourly_rate: Annotated[
        Optional[int],
        typer.Option("--hourly-rate", "-hr", callback=validate_non_negative),
    ] = None,
    outsourcing_cost: Annotated[
        int,
        typer.Option("--outsourcing-cost", "-oc", callback=validate_non_negative),
    ] = 0,
) -> None:
    """Create a project from a template or from requirement text and activate it."""
    config = CONFIGURATION_REPO.get_config()

    with exit_on_invalid_input():
        project = get_project_template(
            name, start, template, config["default_duration_days"]
        )
        if delivery is not None:
            project["delivery_date"] = delivery
        if due is not None:
            project["due_date"] = due
        if client_name is not None:
            project["client_name"] = client_name
        if director is not None:
            project["stakeholders"]["director"] = director
        if agency is not None:
            project["stakeholders"]["agency"] = agency
        if client_contact is not None:
            project["stakeholders"]["client"] = client_contact
        project["total_budget"] = total_budget
        project["hourly_rate"] = hourly_rate
        project["outsourcing_cost"] = outsourcing_cost

        if requirements is not None:
            project["tasks"] = generate_tasks_from_text(requirements)
        else:
            project["tasks"] = generate_wbs(template)

        project_id = PROJECT_REPO.save_new_project(project)
        save_recomputed_project(PROJECT_REPO.get_project(project_id))

    CONFIGURATION_REPO.set_active_project_id(project_id)
    show_schedule(project_id)


@app.command("list, ls")
def list_projects() -> None:
    """List all projects; the active one is marked with *."""
    config = CONFIGURATION_REPO.get_config()
    projects = sorted(
        PROJECT_REPO.get_all_projects(), key=lambda project: project["created"]
    )
    projects_view(projects, config["active_project_id"])


@app.command("use, u", no_args_is_help=True)
def use(
    project: Annotated[
        str, typer.Argument(help="id, id prefix or name", autocompletion=complete_project)
    ],
) -> None:
    """Make a project the target of every task command."""
    with exit_on_invalid_input():
        project_id = resolve_project_id(project)
    CONFIGURATION_REPO.set_active_project_id(project_id)
    show_schedule(project_id)


@app.command("show, s")
def show(
    project: Annotated[
        Optional[str],
        typer.Argument(
            help="id, id prefix or name (default: active project)",
            autocompletion=complete_project,
        ),
    ] = None,
    details: Annotated[
        bool, typer.Option("--details", help="show project properties too")
    ] = False,
) -> None:
    """Show the computed schedule and its validation."""
    with exit_on_invalid_input():
        if project is not None:
            project_id = resolve_project_id(project)
        else:
            project_id = str(get_active_project()["id"])

    if details:
        single_project_view(PROJECT_REPO.get_project(project_id))
    show_schedule(project_id)


@app.command("delete, d", no_args_is_help=True)
def delete(
    project: Annotated[
        str, typer.Argument(help="id, id prefix or name", autocompletion=complete_project)
    ],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="do not ask for confirmation")
    ] = False,
) -> None:
    """Delete a project and its file."""
    with exit_on_invalid_input():
        project_id = resolve_project_id(project)
    stored_project = PROJECT_REPO.get_project(project_id)

    if not yes:
        typer.confirm(f"Delete project '{stored_project['name']}'?", abort=True)

    PROJECT_REPO.delete_project(project_id)
    if CONFIGURATION_REPO.get_config()["active_project_id"] == project_id:
        CONFIGURATION_REPO.set_active_project_id(None)

    console = Console()
    console.print(f"[green]Deleted project '{stored_project['name']}'[/green]")


@app.command("dates", no_args_is_help=True)
def dates(
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    delivery: Annotated[
        Optional[pendulum.Date],
        typer.Option("--delivery", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    due: Annotated[
        Optional[pendulum.Date],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Change the governing dates of the active project and reschedule."""
    with exit_on_invalid_input():
        project = get_active_project()
        if start is not None:
            project["start_date"] = start
        if delivery is not None:
            project["delivery_date"] = delivery
        if due is not None:
            project["due_date"] = due
        project = save_recomputed_project(project)

    show_schedule(str(project["id"]))


@app.command("holiday-add, ha", no_args_is_help=True)
def holiday_add(
    holidays: Annotated[
        list[str], typer.Argument(help="one or more dates, " + DATE_HELP)
    ],
) -> None:
    """Add ad hoc non-working days to the active project."""
    with exit_on_invalid_input():
        project = get_active_project()
        for holiday in holidays:
            holiday_date = parse_date(holiday)
            if holiday_date is not None and holiday_date not in project["custom_holidays"]:
                project["custom_holidays"].append(holiday_date)
        project["custom_holidays"].sort()
        project = save_recomputed_project(project)

    show_schedule(str(project["id"]))


@app.command("holiday-remove, hr", no_args_is_help=True)
def holiday_remove(
    holidays: Annotated[
        list[str], typer.Argument(help="one or more dates, " + DATE_HELP)
    ],
) -> None:
    """Remove ad hoc non-working days from the active project."""
    with exit_on_invalid_input():
        project = get_active_project()
        removed_dates = [parse_date(holiday) for holiday in holidays]
        project["custom_holidays"] = [
            holiday
            for holiday in project["custom_holidays"]
            if holiday not in removed_dates
        ]
        project = save_recomputed_project(project)

    show_schedule(str(project["id"]))


@app.command("finance, f")
def finance(
    total_budget: Annotated[
        Optional[int],
        typer.Option("--budget", "-b", callback=validate_non_negative),
    ] = None,
    remove_budget: Annotated[bool, typer.Option("--remove-budget")] = False,
    hourly_rate: Annotated[
        Optional[int],
        typer.Option("--hourly-rate", "-hr", callback=validate_non_negative),
    ] = None,
    remove_hourly_rate: Annotated[
        bool,
        typer.Option(
            "--remove-hourly-rate",
            help="derive the rate from budget and estimated hours instead",
        ),
    ] = False,
    outsourcing_cost: Annotated[
        Optional[int],
        typer.Option("--outsourcing-cost", "-oc", callback=validate_non_negative),
    ] = None,
) -> None:
    """Show cost projections; options update the project's money settings first."""
    config = CONFIGURATION_REPO.get_config()

    with exit_on_invalid_input():
        project = get_active_project()
        if total_budget is not None:
            project["total_budget"] = total_budget
        if remove_budget:
            project["total_budget"] = None
        if hourly_rate is not None:
            project["hourly_rate"] = hourly_rate
        if remove_hourly_rate:
            project["hourly_rate"] = None
        if outsourcing_cost is not None:
            project["outsourcing_cost"] = outsourcing_cost
        if (
            total_budget is not None
            or remove_budget
            or hourly_rate is not None
            or remove_hourly_rate
            or outsourcing_cost is not None
        ):
            PROJECT_REPO.update_project(project)

    rate = project["hourly_rate"]
    if rate is None:
        rate = effective_hourly_rate(
            project["total_budget"],
            project["outsourcing_cost"],
            total_estimated_hours(project["tasks"]),
            config["fallback_hourly_rate"],
        )
    financial_view(
        project, project_financials(project, config["fallback_hourly_rate"]), rate
    )


@app.command("export, e")
def export(
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="CSV file path (default: <project name>-<date>.csv in the current directory)",
        ),
    ] = None,
) -> None:
    """Export the active project's schedule as CSV."""
    with exit_on_invalid_input():
        project = get_active_project()

    if output is None:
        output = Path(f"{project['name']}-{date_to_str(project['start_date'])}.csv")
    output.write_text(export_tasks_csv(project["tasks"]), encoding="utf-8-sig")

    console = Console()
    console.print(f"[green]Exported {len(project['tasks'])} task(s) to {output}[/green]")
