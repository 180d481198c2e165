"""Nesting bookkeeping shared by every resource wrapping one connection."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

from txscope.kernel.errors import TransactionMisuseError


class BoundaryKind(str, Enum):
    TRANSACTION = "transaction"
    SAVEPOINT = "savepoint"
    # Depth increment with no driver-level boundary behind it.
    ABSORBED = "absorbed"


@dataclasses.dataclass(frozen=True)
class Boundary:
    """One opened level: its kind, savepoint name and driver handle."""

    kind: BoundaryKind
    name: str | None = None
    handle: Any = None


@dataclasses.dataclass
class NestingState:
    """Depth counter, savepoint mode and rollback-only flag of one connection.

    Stored with the connection rather than on a resource object, so that
    resources created at nested call boundaries observe the depth opened by
    their callers.
    """

    use_savepoints: bool = False
    rollback_only: bool = False
    boundaries: list[Boundary] = dataclasses.field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.boundaries)

    def configure(self, use_savepoints: bool) -> None:
        if self.boundaries:
            raise TransactionMisuseError(
                "Cannot configure savepoint nesting while a transaction is active",
                operation="configure",
                detail={"depth": self.depth},
            )
        self.use_savepoints = use_savepoints

    def next_kind(self) -> BoundaryKind:
        if not self.boundaries:
            return BoundaryKind.TRANSACTION
        if self.use_savepoints:
            return BoundaryKind.SAVEPOINT
        return BoundaryKind.ABSORBED

    def push(self, boundary: Boundary) -> None:
        self.boundaries.append(boundary)

    def pop(self, operation: str) -> Boundary:
        if not self.boundaries:
            raise TransactionMisuseError(
                f"Cannot {operation}: no active transaction",
                operation=operation,
            )
        return self.boundaries.pop()

    def mark_rollback_only(self) -> None:
        self.rollback_only = True

    def clear_rollback_only(self) -> bool:
        """Reset the flag once the top-level transaction ends; return its old value."""
        flag, self.rollback_only = self.rollback_only, False
        return flag


__all__ = ["Boundary", "BoundaryKind", "NestingState"]
