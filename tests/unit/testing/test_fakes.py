"""Unit tests for the in-memory transactional resources."""

from __future__ import annotations

import asyncio

import pytest

from txscope.kernel.errors import RollbackOnlyError, TransactionMisuseError, TransactionResolutionError
from txscope.kernel.transactions import TransactionalResource
from txscope.testing import AsyncInMemoryTransactionalResource, InMemoryTransactionalResource


# ---------------------------------------------------------------------------
# InMemoryTransactionalResource
# ---------------------------------------------------------------------------


class TestInMemoryTransactionalResource:
    def test_is_a_transactional_resource(self) -> None:
        assert isinstance(InMemoryTransactionalResource(), TransactionalResource)

    def test_writes_outside_transaction_autocommit(self) -> None:
        resource = InMemoryTransactionalResource()
        resource.insert(1, "a")
        resource.delete(1)
        resource.insert(2, "b")
        assert resource.committed == {2: "b"}
        assert resource.calls == []

    def test_rollback_restores_snapshot(self) -> None:
        resource = InMemoryTransactionalResource()
        resource.insert(1, "kept")
        resource.begin()
        resource.insert(2, "dropped")
        resource.delete(1)
        resource.rollback()
        assert resource.rows == {1: "kept"}
        assert resource.calls == ["begin", "rollback"]

    def test_savepoints_are_named_by_depth(self) -> None:
        resource = InMemoryTransactionalResource(savepoint_prefix="sp")
        resource.configure(True)
        resource.begin()
        resource.insert(1, "outer")
        resource.begin()
        resource.insert(2, "inner")
        resource.rollback()
        resource.begin()
        resource.commit()
        resource.commit()
        assert resource.committed == {1: "outer"}
        assert resource.calls == ["begin", "savepoint:sp_1", "rollback_to:sp_1", "savepoint:sp_1", "release:sp_1", "commit"]

    def test_absorbed_rollback_forces_rollback_of_root(self) -> None:
        resource = InMemoryTransactionalResource()
        resource.begin()
        resource.begin()
        resource.insert(1, "x")
        resource.rollback()
        assert resource.is_rollback_only()
        with pytest.raises(RollbackOnlyError):
            resource.commit()
        assert resource.committed == {}
        assert resource.calls == ["begin", "rollback"]
        assert not resource.is_rollback_only()

    def test_commit_without_transaction_is_misuse(self) -> None:
        with pytest.raises(TransactionMisuseError):
            InMemoryTransactionalResource().commit()

    def test_injected_failure_keeps_depth_consistent(self) -> None:
        resource = InMemoryTransactionalResource(fail_on={"commit"})
        resource.begin()
        with pytest.raises(TransactionResolutionError) as info:
            resource.commit()
        assert isinstance(info.value.cause, RuntimeError)
        assert resource.depth() == 0


# ---------------------------------------------------------------------------
# AsyncInMemoryTransactionalResource
# ---------------------------------------------------------------------------


class TestAsyncInMemoryTransactionalResource:
    def test_nested_savepoint_round_trip(self) -> None:
        resource = AsyncInMemoryTransactionalResource(savepoint_prefix="sp")
        resource.configure(True)

        async def run() -> None:
            await resource.begin()
            resource.insert(1, "outer")
            await resource.begin()
            assert resource.depth() == 2
            await resource.commit()
            await resource.commit()

        asyncio.run(run())
        assert resource.committed == {1: "outer"}
        assert resource.calls == ["begin", "savepoint:sp_1", "release:sp_1", "commit"]
