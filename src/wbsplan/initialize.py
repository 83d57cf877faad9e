# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from wbsplan import configuration
from wbsplan import state as app_state
from wbsplan.repository.configuration import CONFIGURATION_REPO
from wbsplan.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()
    configuration.load_data_path_configuration()
    configuration.DATA_PROJECTS_DIR.mkdir(parents=True, exist_ok=True)

    config = CONFIGURATION_REPO.get_config()
    view_state.set_show_header(config["show_header"])
    app_state.set_holiday_region(config["holiday_region"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(configuration.DEFAULT_CONFIGURATION), Dumper=Dumper)
        )
