# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "wbsplan"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_PROJECTS_DIR: Path = DATA_PATH / "projects"


class Configuration(TypedDict):
    show_header: bool
    data_path: Optional[str]
    holiday_region: str
    fallback_hourly_rate: int
    default_duration_days: int
    active_project_id: Optional[str]


DEFAULT_CONFIGURATION: Configuration = {
    "show_header": True,
    "data_path": None,
    "holiday_region": "jp",
    "fallback_hourly_rate": 5000,
    "default_duration_days": 60,
    "active_project_id": None,
}


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    global DATA_PATH, DATA_PROJECTS_DIR

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_PROJECTS_DIR = DATA_PATH / "projects"
