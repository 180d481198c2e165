"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError             (application.py)
    │   └── TransactionMisuseError
    └── InfrastructureError          (infrastructure.py)
        └── TransactionResolutionError
            └── RollbackOnlyError
"""

from txscope.kernel.errors.application import ApplicationError, TransactionMisuseError
from txscope.kernel.errors.base import BaseError
from txscope.kernel.errors.infrastructure import (
    InfrastructureError,
    RollbackOnlyError,
    TransactionResolutionError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "InfrastructureError",
    "RollbackOnlyError",
    "TransactionMisuseError",
    "TransactionResolutionError",
]
