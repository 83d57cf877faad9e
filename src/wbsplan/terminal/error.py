# SPDX-License-Identifier: MIT

from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console

from wbsplan.exception import InvalidInputError

console = Console(stderr=True)


@contextmanager
def exit_on_invalid_input() -> Iterator[None]:
    """Print InvalidInputError in red and exit with code 1."""
    try:
        yield
    except InvalidInputError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
