# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from wbsplan import configuration

logger = logging.getLogger(__name__)


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            self._config = deepcopy(configuration.DEFAULT_CONFIGURATION)
            self.is_dirty = True

        # Back-fill keys added after the file was written
        for key, default in configuration.DEFAULT_CONFIGURATION.items():
            if key not in self._config:
                self._config[key] = default  # type: ignore[literal-required]
                self.is_dirty = True

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))
        logger.info("Wrote configuration to %s", configuration.APP_CONFIG_PATH)

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        show_header: Optional[bool] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        holiday_region: Optional[str] = None,
        fallback_hourly_rate: Optional[int] = None,
        default_duration_days: Optional[int] = None,
    ) -> None:
        self.is_dirty = True

        if show_header is not None:
            self.config["show_header"] = show_header
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if holiday_region is not None:
            self.config["holiday_region"] = holiday_region
        if fallback_hourly_rate is not None:
            self.config["fallback_hourly_rate"] = fallback_hourly_rate
        if default_duration_days is not None:
            self.config["default_duration_days"] = default_duration_days

    def set_active_project_id(self, project_id: Optional[str]) -> None:
        self.is_dirty = True
        self.config["active_project_id"] = project_id


CONFIGURATION_REPO = ConfigurationRepository()
