# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from wbsplan.view.state import get_show_header


def header(project_name: Optional[str], sub_header: Optional[str] = None) -> None:
    """Print the application header with the active project.

    Args:
        project_name: Name of the active project, if any
        sub_header: Optional sub-header text to display
    """
    if not get_show_header():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"
    active_project = f"[plum1]{project_name or 'no active project'}[/plum1]"

    print(Padding("[dark_orange]wbsplan[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    print(Padding(active_project, (0, 1)))
