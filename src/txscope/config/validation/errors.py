"""Config validation errors."""
from __future__ import annotations

from txscope.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Raised when transaction settings are invalid or could not be loaded."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required ``<PREFIX>_*`` environment variable is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable (bad policy name, level, size).

    ``setting_name`` is the environment variable; a coercion or parse
    failure behind the rejection is kept as ``cause``.
    """
    default_code = "invalid_setting_value"

    def __init__(
        self,
        setting_name: str,
        value: object,
        reason: str,
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "value": repr(value), "reason": reason},
            cause=cause,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
