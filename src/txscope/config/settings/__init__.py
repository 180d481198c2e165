"""Config settings – env-based configuration."""
from txscope.config.settings.base import Settings
from txscope.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from txscope.config.settings.transactions import TransactionSettings, get_settings

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader", "TransactionSettings", "get_settings"]
