"""Config settings – TransactionSettings."""
from __future__ import annotations

import dataclasses
import functools
import logging

from txscope.config.settings.base import Settings
from txscope.config.settings.loaders import EnvSettingsLoader
from txscope.kernel.errors import TransactionMisuseError
from txscope.kernel.transactions import DEFAULT_SAVEPOINT_PREFIX, TransactionPolicy


@dataclasses.dataclass
class TransactionSettings(Settings):
    """Defaults applied by scopes and the ``transactional`` decorator.

    Read from ``TXSCOPE_DEFAULT_POLICY``, ``TXSCOPE_HISTORY_SIZE``,
    ``TXSCOPE_LOG_LEVEL`` and ``TXSCOPE_SAVEPOINT_PREFIX``.
    """

    _prefix: dataclasses.ClassVar[str] = "TXSCOPE"

    default_policy: str = TransactionPolicy.REQUIRED.name
    history_size: int = 100
    log_level: str = "INFO"
    savepoint_prefix: str = DEFAULT_SAVEPOINT_PREFIX

    def _validate(self) -> None:
        try:
            TransactionPolicy.parse(self.default_policy)
        except TransactionMisuseError as exc:
            raise self.invalid("default_policy", "unknown policy", cause=exc) from exc
        if self.history_size <= 0:
            raise self.invalid("history_size", "must be positive")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise self.invalid("log_level", "unknown log level")
        if not self.savepoint_prefix.isidentifier():
            raise self.invalid("savepoint_prefix", "must be an identifier")

    @property
    def policy(self) -> TransactionPolicy:
        return TransactionPolicy.parse(self.default_policy)

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


@functools.lru_cache(maxsize=1)
def get_settings() -> TransactionSettings:
    """Return process-wide settings loaded from the environment (cached)."""
    return EnvSettingsLoader().load(TransactionSettings)


__all__ = ["TransactionSettings", "get_settings"]
