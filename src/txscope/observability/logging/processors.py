"""Observability – get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger for *name*, bound to *initial_values*."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["get_logger"]
