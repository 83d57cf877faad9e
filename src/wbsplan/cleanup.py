# SPDX-License-Identifier: MIT

import atexit

from wbsplan.repository.configuration import CONFIGURATION_REPO
from wbsplan.repository.project import PROJECT_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()
    PROJECT_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
