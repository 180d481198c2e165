"""Kernel transactions – policy values, resource ports and nesting state."""

from txscope.kernel.transactions.nesting import Boundary, BoundaryKind, NestingState
from txscope.kernel.transactions.policy import TransactionPolicy
from txscope.kernel.transactions.resource import (
    DEFAULT_SAVEPOINT_PREFIX,
    AsyncNestedTransactionalResource,
    AsyncTransactionalResource,
    NestedTransactionalResource,
    TransactionalResource,
)

__all__ = [
    "DEFAULT_SAVEPOINT_PREFIX",
    "AsyncNestedTransactionalResource",
    "AsyncTransactionalResource",
    "Boundary",
    "BoundaryKind",
    "NestedTransactionalResource",
    "NestingState",
    "TransactionPolicy",
    "TransactionalResource",
]
