"""Config errors."""
from __future__ import annotations

from logmask.kernel.errors import BaseError


class ConfigError(BaseError):
    """Configuration is invalid or could not be loaded."""

    code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable has no value and no default."""

    code = "missing_required_setting"
    detail_keys = ("setting",)

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing", setting=setting_name)
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be coerced or is out of range."""

    code = "invalid_setting_value"
    detail_keys = ("setting", "reason")

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            setting=setting_name,
            reason=reason,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
