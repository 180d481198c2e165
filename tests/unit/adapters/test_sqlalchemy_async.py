"""Unit tests for the SQLAlchemy adapter — AsyncConnection over aiosqlite."""
from __future__ import annotations

import asyncio
import pathlib
from typing import Any

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, event, insert, select
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from txscope.adapters.sqlalchemy import AsyncSqlAlchemyTransactionalResource, open_async_scope
from txscope.application.scope import transactional
from txscope.kernel.transactions import TransactionPolicy

metadata = MetaData()
items = Table(
    "items",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(100), nullable=False),
)


async def _setup_engine(tmp_path: pathlib.Path) -> AsyncEngine:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'items.sqlite3'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _connect(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    return engine


async def _insert(conn: AsyncConnection, item_id: int, name: str) -> None:
    await conn.execute(insert(items).values(id=item_id, name=name))


async def _persisted(engine: AsyncEngine, item_id: int) -> Any:
    async with engine.connect() as other:
        result = await other.execute(select(items.c.name).where(items.c.id == item_id))
        return result.scalar_one_or_none()


class TestAsyncResource:
    def test_savepoint_nesting(self, tmp_path: pathlib.Path) -> None:
        async def run() -> None:
            engine = await _setup_engine(tmp_path)
            async with engine.connect() as conn:
                resource = AsyncSqlAlchemyTransactionalResource(conn)
                resource.configure(True)
                await resource.begin()
                await resource.begin()
                assert conn.in_nested_transaction()
                await resource.commit()
                assert conn.in_transaction()
                await resource.commit()
                assert not conn.in_transaction()
                assert resource.depth() == 0
            await engine.dispose()

        asyncio.run(run())


class TestAsyncScope:
    def test_required_commit_and_rollback(self, tmp_path: pathlib.Path) -> None:
        async def run() -> None:
            engine = await _setup_engine(tmp_path)
            async with engine.connect() as conn:
                scope = open_async_scope(conn, TransactionPolicy.REQUIRED)
                await scope.run_into(lambda: _insert(conn, 1, "alpha"))

                async def failing() -> None:
                    await _insert(conn, 2, "beta")
                    raise ValueError("oops")

                with pytest.raises(ValueError):
                    await scope.run_into(failing)

            assert await _persisted(engine, 1) == "alpha"
            assert await _persisted(engine, 2) is None
            await engine.dispose()

        asyncio.run(run())

    def test_requires_new_nested_rollback_outer_commits(self, tmp_path: pathlib.Path) -> None:
        async def run() -> None:
            engine = await _setup_engine(tmp_path)
            async with engine.connect() as conn:
                scope = open_async_scope(conn, TransactionPolicy.REQUIRES_NEW)

                async def inner() -> None:
                    await _insert(conn, 888, "nested")
                    raise ValueError("oops")

                async def outer() -> None:
                    await _insert(conn, 999, "outer")
                    with pytest.raises(ValueError):
                        await scope.run_into(inner)

                await scope.run_into(outer)

            assert await _persisted(engine, 999) == "outer"
            assert await _persisted(engine, 888) is None
            await engine.dispose()

        asyncio.run(run())

    def test_transactional_coroutine_method(self, tmp_path: pathlib.Path) -> None:
        class ItemService:
            def __init__(self, connection: AsyncConnection) -> None:
                self._connection = connection

            @transactional(TransactionPolicy.REQUIRES_NEW)
            async def add(self, item_id: int, name: str) -> None:
                await _insert(self._connection, item_id, name)

        async def run() -> None:
            engine = await _setup_engine(tmp_path)
            async with engine.connect() as conn:
                await ItemService(conn).add(5, "decorated")
            assert await _persisted(engine, 5) == "decorated"
            await engine.dispose()

        asyncio.run(run())
