# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from wbsplan.terminal import configuration, project, task, tree
from wbsplan.terminal.custom_typer import OrderedTyperGroup
from wbsplan.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="wbsplan - WBS scheduling for production projects in the CLI",
    no_args_is_help=True,
)
app.add_typer(project.app, name="project, p")
app.add_typer(task.app, name="task, t")
app.add_typer(tree.app, name="tree, tr")
app.add_typer(configuration.app, name="config, c")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log scheduling decisions and store writes",
        ),
    ] = False,
) -> None:
    """
    wbsplan - WBS scheduling for production projects in the CLI

    Global options that apply to all commands.
    """
    configure_logging(verbose)
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
