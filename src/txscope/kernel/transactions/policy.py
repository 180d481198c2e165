"""Transaction policies declared by transactional units of work."""

from __future__ import annotations

from enum import Enum

from txscope.kernel.errors import TransactionMisuseError


class TransactionPolicy(str, Enum):
    """How a scope relates to an ambient transaction.

    ``REQUIRED`` joins an open transaction and only starts one when none is
    open. ``REQUIRES_NEW`` always opens an independent boundary, as a
    savepoint when a transaction is already open.
    """

    REQUIRED = "required"
    REQUIRES_NEW = "requires_new"

    @property
    def forces_new_boundary(self) -> bool:
        return self is TransactionPolicy.REQUIRES_NEW

    @classmethod
    def parse(cls, value: "TransactionPolicy | str | None") -> "TransactionPolicy":
        """Resolve *value* to a policy; names and values are case-insensitive."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for policy in cls:
                if key in (policy.value, policy.name.lower()):
                    return policy
        raise TransactionMisuseError(
            f"Unresolved transaction policy: {value!r}",
            operation="policy",
            detail={"allowed": [p.name for p in cls]},
        )


__all__ = ["TransactionPolicy"]
