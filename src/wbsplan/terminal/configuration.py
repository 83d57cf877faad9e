# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from wbsplan import configuration
from wbsplan.repository.configuration import CONFIGURATION_REPO
from wbsplan.terminal.custom_typer import AliasedTyperGroup
from wbsplan.terminal.validate import (
    validate_holiday_region,
    validate_non_negative,
    validate_positive,
)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _configuration_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("holiday_region", config["holiday_region"])
    table.add_row("fallback_hourly_rate", str(config["fallback_hourly_rate"]))
    table.add_row("default_duration_days", str(config["default_duration_days"]))
    table.add_row("active_project_id", str(config["active_project_id"]))
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    console = Console()
    console.print(_configuration_table())

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        from yaml import Loader  # type: ignore[assignment] # noqa: F401

        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above views",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing project files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
    holiday_region: Annotated[
        Optional[str],
        typer.Option(
            "--holiday-region",
            callback=validate_holiday_region,
            help="Regional public holiday table (e.g. jp)",
        ),
    ] = None,
    fallback_hourly_rate: Annotated[
        Optional[int],
        typer.Option(
            "--fallback-hourly-rate",
            callback=validate_non_negative,
            help="Hourly rate used when a project has neither rate nor budget",
        ),
    ] = None,
    default_duration_days: Annotated[
        Optional[int],
        typer.Option(
            "--default-duration-days",
            callback=validate_positive,
            help="Calendar days from start to delivery for new projects",
        ),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        data_path=data_path,
        remove_data_path=remove_data_path,
        holiday_region=holiday_region,
        fallback_hourly_rate=fallback_hourly_rate,
        default_duration_days=default_duration_days,
    )

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table("Updated Configuration"))
