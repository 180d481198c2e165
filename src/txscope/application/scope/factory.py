"""Application scope – build a resource + scope pair from a connection."""
from __future__ import annotations

from typing import Any

from txscope.application.scope.scope import AsyncTransactionScope, TransactionScope
from txscope.kernel.transactions import AsyncTransactionalResource, TransactionalResource, TransactionPolicy


def open_scope(connection: Any, policy: TransactionPolicy | str | None, **kwargs: Any) -> TransactionScope:
    """Wrap *connection* (or take a ready resource) and return a scope for *policy*.

    Savepoint nesting is fixed from *policy* only when the connection has no
    transaction opened by an enclosing scope.
    """
    if isinstance(connection, TransactionalResource):
        resource = connection
    else:
        from txscope.adapters.sqlalchemy import SqlAlchemyTransactionalResource

        resource = SqlAlchemyTransactionalResource(connection)
    return TransactionScope.for_resource(resource, policy, **kwargs)


def open_async_scope(connection: Any, policy: TransactionPolicy | str | None, **kwargs: Any) -> AsyncTransactionScope:
    """Async counterpart of :func:`open_scope` for ``AsyncConnection`` objects."""
    if isinstance(connection, AsyncTransactionalResource):
        resource = connection
    else:
        from txscope.adapters.sqlalchemy import AsyncSqlAlchemyTransactionalResource

        resource = AsyncSqlAlchemyTransactionalResource(connection)
    return AsyncTransactionScope.for_resource(resource, policy, **kwargs)


__all__ = ["open_async_scope", "open_scope"]
