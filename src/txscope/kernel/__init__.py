"""Kernel – framework-agnostic building blocks."""

from txscope.kernel.errors import (
    ApplicationError,
    BaseError,
    InfrastructureError,
    RollbackOnlyError,
    TransactionMisuseError,
    TransactionResolutionError,
)
from txscope.kernel.transactions import TransactionPolicy

__all__ = [
    "ApplicationError",
    "BaseError",
    "InfrastructureError",
    "RollbackOnlyError",
    "TransactionMisuseError",
    "TransactionPolicy",
    "TransactionResolutionError",
]
