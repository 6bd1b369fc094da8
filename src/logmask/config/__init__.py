"""Config – 12-factor settings for the logging layer."""

from logmask.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from logmask.config.settings import EnvSettingsLoader, LogMaskSettings, Settings

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "LogMaskSettings",
    "MissingRequiredSettingError",
    "Settings",
]
