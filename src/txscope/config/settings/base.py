"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses

from txscope.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for settings read from ``<PREFIX>_<FIELD>`` variables.

    Validation failures name the environment variable to fix rather than
    the dataclass field.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def invalid(
        self, field_name: str, reason: str, *, cause: BaseException | None = None
    ) -> InvalidSettingValueError:
        """Build the error for *field_name*'s current value."""
        return InvalidSettingValueError(
            self.env_key(field_name), getattr(self, field_name), reason, cause=cause
        )

    def _validate(self) -> None:
        """Override to add cross-field validation."""


__all__ = ["Settings"]
