"""SQLAlchemy adapter – SqlAlchemyTransactionalResource and its async twin.

Top-level boundaries map to ``Connection.begin()``, savepoints to
``Connection.begin_nested()``. The nesting state lives in
``Connection.info`` so every resource wrapping the same connection sees the
same depth.
"""
from __future__ import annotations

import contextlib
from typing import Any, Iterator

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from txscope.kernel.errors import TransactionResolutionError
from txscope.kernel.transactions import (
    AsyncNestedTransactionalResource,
    Boundary,
    NestedTransactionalResource,
    NestingState,
)
from txscope.observability.logging import get_logger

NESTING_INFO_KEY = "txscope.nesting"

_log = get_logger(__name__)


def nesting_state_of(connection: Connection | AsyncConnection) -> NestingState:
    """Return (creating on first use) the nesting state attached to *connection*.

    ``Connection.info`` lives with the pooled DBAPI connection, not with the
    checkout. Open levels recorded while the connection has no transaction
    belong to an earlier checkout whose transaction the pool already reset;
    such a state is discarded.
    """
    state = connection.info.get(NESTING_INFO_KEY)
    if state is not None and state.depth and not connection.in_transaction():
        _log.warning("resource.stale_nesting_reset", depth=state.depth)
        state = None
    if state is None:
        state = connection.info[NESTING_INFO_KEY] = NestingState()
    return state


@contextlib.contextmanager
def _driver_errors(operation: str, depth: int) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        _log.error("resource.driver_error", operation=operation, depth=depth, error=repr(exc))
        raise TransactionResolutionError(operation, cause=exc, detail={"depth": depth}) from exc


class SqlAlchemyTransactionalResource(NestedTransactionalResource):
    """Transactional resource over a synchronous SQLAlchemy ``Connection``."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    @property
    def connection(self) -> Connection:
        return self._connection

    def _nesting(self) -> NestingState:
        return nesting_state_of(self._connection)

    def _open_transaction(self) -> Any:
        with _driver_errors("begin", 0):
            if self._connection.in_transaction():
                # autobegun by an earlier statement; it becomes the top-level boundary
                _log.debug("resource.adopt_transaction")
                return self._connection.get_transaction()
            _log.debug("resource.begin")
            return self._connection.begin()

    def _open_savepoint(self, name: str) -> Any:
        with _driver_errors("savepoint", self.depth()):
            _log.debug("resource.savepoint", name=name, depth=self.depth())
            return self._connection.begin_nested()

    def _commit_transaction(self, boundary: Boundary) -> None:
        with _driver_errors("commit", 0):
            boundary.handle.commit()

    def _rollback_transaction(self, boundary: Boundary) -> None:
        with _driver_errors("rollback", 0):
            boundary.handle.rollback()

    def _release_savepoint(self, boundary: Boundary) -> None:
        with _driver_errors("release_savepoint", self.depth()):
            boundary.handle.commit()

    def _rollback_savepoint(self, boundary: Boundary) -> None:
        with _driver_errors("rollback_savepoint", self.depth()):
            boundary.handle.rollback()


class AsyncSqlAlchemyTransactionalResource(AsyncNestedTransactionalResource):
    """Transactional resource over an ``AsyncConnection``."""

    def __init__(self, connection: AsyncConnection) -> None:
        self._connection = connection

    @property
    def connection(self) -> AsyncConnection:
        return self._connection

    def _nesting(self) -> NestingState:
        return nesting_state_of(self._connection)

    async def _open_transaction(self) -> Any:
        with _driver_errors("begin", 0):
            if self._connection.in_transaction():
                _log.debug("resource.adopt_transaction")
                return self._connection.get_transaction()
            _log.debug("resource.begin")
            return await self._connection.begin()

    async def _open_savepoint(self, name: str) -> Any:
        with _driver_errors("savepoint", self.depth()):
            _log.debug("resource.savepoint", name=name, depth=self.depth())
            return await self._connection.begin_nested()

    async def _commit_transaction(self, boundary: Boundary) -> None:
        with _driver_errors("commit", 0):
            await boundary.handle.commit()

    async def _rollback_transaction(self, boundary: Boundary) -> None:
        with _driver_errors("rollback", 0):
            await boundary.handle.rollback()

    async def _release_savepoint(self, boundary: Boundary) -> None:
        with _driver_errors("release_savepoint", self.depth()):
            await boundary.handle.commit()

    async def _rollback_savepoint(self, boundary: Boundary) -> None:
        with _driver_errors("rollback_savepoint", self.depth()):
            await boundary.handle.rollback()


__all__ = [
    "NESTING_INFO_KEY",
    "AsyncSqlAlchemyTransactionalResource",
    "SqlAlchemyTransactionalResource",
    "nesting_state_of",
]
