"""Infrastructure errors — driver-level transaction failures."""

from __future__ import annotations

from typing import Any

from txscope.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a programming error."""

    default_code = "infrastructure_error"


class TransactionResolutionError(InfrastructureError):
    """The driver rejected a begin, commit or rollback request.

    ``operation`` names the rejected primitive; the driver exception is
    kept as ``cause``.
    """

    default_code = "transaction_resolution_failed"

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Transaction {operation} failed", **kwargs)
        self.operation = operation


class RollbackOnlyError(TransactionResolutionError):
    """Commit requested for a transaction already marked rollback-only."""

    default_code = "transaction_rollback_only"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            "commit",
            message or "Transaction was marked rollback-only and has been rolled back",
            **kwargs,
        )


__all__ = ["InfrastructureError", "RollbackOnlyError", "TransactionResolutionError"]
