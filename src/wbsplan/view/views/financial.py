# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from wbsplan.color import INVALID_COLOR, VALID_COLOR, WARNING_COLOR
from wbsplan.model.financials import ProjectFinancials
from wbsplan.model.project import Project
from wbsplan.view.views.header import header


def _flag(value: bool, color: str) -> str:
    return f"[{color}]yes[/{color}]" if value else f"[{VALID_COLOR}]no[/{VALID_COLOR}]"


def financial_view(
    project: Project, financials: ProjectFinancials, hourly_rate: int
) -> None:
    header(project["name"], "finance")

    finance_table = Table(box=box.SIMPLE)
    finance_table.add_column("metric")
    finance_table.add_column("value", justify="right")

    finance_table.add_row("hourly rate", f"{hourly_rate:,}")
    if project["total_budget"] is not None:
        finance_table.add_row("budget", f"{project['total_budget']:,}")
    finance_table.add_row("estimated hours", str(financials["estimated_hours"]))
    finance_table.add_row("actual hours", str(financials["total_actual_hours"]))
    finance_table.add_row("estimated cost", f"{financials['estimated_cost']:,}")
    finance_table.add_row("actual cost", f"{financials['actual_cost']:,}")
    finance_table.add_row(
        "predicted total cost", f"{financials['predicted_total_cost']:,}"
    )
    finance_table.add_row(
        "deficit risk", _flag(financials["is_deficit_risk"], WARNING_COLOR)
    )
    finance_table.add_row(
        "over budget", _flag(financials["is_current_deficit"], INVALID_COLOR)
    )
    finance_table.add_row(
        "affordable time",
        f"{financials['affordable_hours']}h "
        f"({financials['affordable_days']}d {financials['affordable_remaining_hours']}h)",
    )

    console = Console()
    console.print(finance_table)
