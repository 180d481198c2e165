"""Config – 12-factor settings for transaction scopes."""

from txscope.config.settings import EnvSettingsLoader, Settings, SettingsLoader, TransactionSettings, get_settings
from txscope.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "TransactionSettings",
    "get_settings",
]
