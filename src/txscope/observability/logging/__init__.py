"""Observability – structlog configuration and logger helper."""
from txscope.observability.logging.factory import JsonLoggerFactory
from txscope.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
