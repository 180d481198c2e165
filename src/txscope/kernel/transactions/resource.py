"""Transactional resource ports — begin/commit/rollback plus nesting depth."""

from __future__ import annotations

import abc
from typing import Any

from txscope.kernel.errors import RollbackOnlyError
from txscope.kernel.transactions.nesting import Boundary, BoundaryKind, NestingState

DEFAULT_SAVEPOINT_PREFIX = "txscope_sp"


class TransactionalResource(abc.ABC):
    """Port: the single transactional context of one connection."""

    @abc.abstractmethod
    def configure(self, use_savepoints: bool) -> None: ...

    @abc.abstractmethod
    def begin(self) -> None: ...

    @abc.abstractmethod
    def commit(self) -> None: ...

    @abc.abstractmethod
    def rollback(self) -> None: ...

    @abc.abstractmethod
    def depth(self) -> int: ...

    def in_transaction(self) -> bool:
        return self.depth() > 0


class AsyncTransactionalResource(abc.ABC):
    """Port: async variant; only the driver round-trips are awaitable."""

    @abc.abstractmethod
    def configure(self, use_savepoints: bool) -> None: ...

    @abc.abstractmethod
    async def begin(self) -> None: ...

    @abc.abstractmethod
    async def commit(self) -> None: ...

    @abc.abstractmethod
    async def rollback(self) -> None: ...

    @abc.abstractmethod
    def depth(self) -> int: ...

    def in_transaction(self) -> bool:
        return self.depth() > 0


class _NestingMixin:
    """Shared access to the connection's :class:`NestingState`."""

    _savepoint_prefix: str = DEFAULT_SAVEPOINT_PREFIX

    @abc.abstractmethod
    def _nesting(self) -> NestingState:
        """Return the state attached to the wrapped connection."""

    def configure(self, use_savepoints: bool) -> None:
        self._nesting().configure(use_savepoints)

    def depth(self) -> int:
        return self._nesting().depth

    @property
    def use_savepoints(self) -> bool:
        return self._nesting().use_savepoints

    def is_rollback_only(self) -> bool:
        return self._nesting().rollback_only

    def _savepoint_name(self, depth: int) -> str:
        return f"{self._savepoint_prefix}_{depth}"


class NestedTransactionalResource(_NestingMixin, TransactionalResource):
    """Template for resources whose driver offers transactions and savepoints.

    Subclasses implement the ``_open_*`` / ``_commit_*`` / ``_rollback_*`` /
    ``_release_*`` driver hooks. Bookkeeping is updated before each driver
    call, so depth stays consistent even when the driver fails.
    """

    def begin(self) -> None:
        state = self._nesting()
        kind = state.next_kind()
        if kind is BoundaryKind.TRANSACTION:
            state.push(Boundary(kind, handle=self._open_transaction()))
        elif kind is BoundaryKind.SAVEPOINT:
            name = self._savepoint_name(state.depth)
            state.push(Boundary(kind, name=name, handle=self._open_savepoint(name)))
        else:
            state.push(Boundary(kind))

    def commit(self) -> None:
        state = self._nesting()
        boundary = state.pop("commit")
        if boundary.kind is BoundaryKind.SAVEPOINT:
            self._release_savepoint(boundary)
        elif boundary.kind is BoundaryKind.TRANSACTION:
            if state.clear_rollback_only():
                self._rollback_transaction(boundary)
                raise RollbackOnlyError()
            self._commit_transaction(boundary)

    def rollback(self) -> None:
        state = self._nesting()
        boundary = state.pop("rollback")
        if boundary.kind is BoundaryKind.ABSORBED:
            state.mark_rollback_only()
        elif boundary.kind is BoundaryKind.SAVEPOINT:
            self._rollback_savepoint(boundary)
        else:
            state.clear_rollback_only()
            self._rollback_transaction(boundary)

    @abc.abstractmethod
    def _open_transaction(self) -> Any: ...

    @abc.abstractmethod
    def _open_savepoint(self, name: str) -> Any: ...

    @abc.abstractmethod
    def _commit_transaction(self, boundary: Boundary) -> None: ...

    @abc.abstractmethod
    def _rollback_transaction(self, boundary: Boundary) -> None: ...

    @abc.abstractmethod
    def _release_savepoint(self, boundary: Boundary) -> None: ...

    @abc.abstractmethod
    def _rollback_savepoint(self, boundary: Boundary) -> None: ...


class AsyncNestedTransactionalResource(_NestingMixin, AsyncTransactionalResource):
    """Async counterpart of :class:`NestedTransactionalResource`."""

    async def begin(self) -> None:
        state = self._nesting()
        kind = state.next_kind()
        if kind is BoundaryKind.TRANSACTION:
            state.push(Boundary(kind, handle=await self._open_transaction()))
        elif kind is BoundaryKind.SAVEPOINT:
            name = self._savepoint_name(state.depth)
            state.push(Boundary(kind, name=name, handle=await self._open_savepoint(name)))
        else:
            state.push(Boundary(kind))

    async def commit(self) -> None:
        state = self._nesting()
        boundary = state.pop("commit")
        if boundary.kind is BoundaryKind.SAVEPOINT:
            await self._release_savepoint(boundary)
        elif boundary.kind is BoundaryKind.TRANSACTION:
            if state.clear_rollback_only():
                await self._rollback_transaction(boundary)
                raise RollbackOnlyError()
            await self._commit_transaction(boundary)

    async def rollback(self) -> None:
        state = self._nesting()
        boundary = state.pop("rollback")
        if boundary.kind is BoundaryKind.ABSORBED:
            state.mark_rollback_only()
        elif boundary.kind is BoundaryKind.SAVEPOINT:
            await self._rollback_savepoint(boundary)
        else:
            state.clear_rollback_only()
            await self._rollback_transaction(boundary)

    @abc.abstractmethod
    async def _open_transaction(self) -> Any: ...

    @abc.abstractmethod
    async def _open_savepoint(self, name: str) -> Any: ...

    @abc.abstractmethod
    async def _commit_transaction(self, boundary: Boundary) -> None: ...

    @abc.abstractmethod
    async def _rollback_transaction(self, boundary: Boundary) -> None: ...

    @abc.abstractmethod
    async def _release_savepoint(self, boundary: Boundary) -> None: ...

    @abc.abstractmethod
    async def _rollback_savepoint(self, boundary: Boundary) -> None: ...


__all__ = [
    "DEFAULT_SAVEPOINT_PREFIX",
    "AsyncNestedTransactionalResource",
    "AsyncTransactionalResource",
    "NestedTransactionalResource",
    "TransactionalResource",
]
