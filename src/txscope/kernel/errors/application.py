"""Application-layer errors — programmer mistakes at the scope boundary."""

from __future__ import annotations

from typing import Any

from txscope.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class TransactionMisuseError(ApplicationError):
    """The transaction API was driven in a way it does not support.

    Raised for programming errors that must fail fast: re-configuring a
    resource that already began a transaction, resolving a boundary when
    none is open, or building a scope without a resolved policy.
    """

    default_code = "transaction_misuse"

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation


__all__ = ["ApplicationError", "TransactionMisuseError"]
