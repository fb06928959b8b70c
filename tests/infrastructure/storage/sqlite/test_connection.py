"""Unit tests for SQLite connection pool."""

from datetime import datetime
from pathlib import Path

import pytest

from billbook.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_pool,
    get_transaction,
    parse_timestamp,
)


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_defaults(self, tmp_path: Path):
        pool = ConnectionPool(tmp_path / "test.db")
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool._initialized is False

    async def test_initialize_creates_directory(self, tmp_path: Path):
        db_path = tmp_path / "subdir" / "nested" / "test.db"
        pool = ConnectionPool(db_path, pool_size=1)

        await pool.initialize()
        assert db_path.parent.exists()
        assert len(pool._connections) == 1
        await pool.close()

    async def test_connections_enforce_foreign_keys(self, pool: ConnectionPool):
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA foreign_keys")
            row = await cursor.fetchone()
        assert row[0] == 1


class TestTransaction:
    async def test_commit_on_success(self, pool: ConnectionPool):
        async with pool.transaction() as conn:
            await conn.execute(
                "INSERT INTO customers (owner_id, name, phone) VALUES (1, 'A', '1')"
            )

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM customers")
            assert (await cursor.fetchone())[0] == 1

    async def test_rollback_on_error(self, pool: ConnectionPool):
        with pytest.raises(RuntimeError):
            async with pool.transaction() as conn:
                await conn.execute(
                    "INSERT INTO customers (owner_id, name, phone) VALUES (1, 'A', '1')"
                )
                raise RuntimeError("boom")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM customers")
            assert (await cursor.fetchone())[0] == 0
            assert not conn.in_transaction

    async def test_connection_returned_after_rollback(self, db_path: Path):
        pool = ConnectionPool(db_path, pool_size=1)
        try:
            with pytest.raises(ValueError):
                async with pool.transaction():
                    raise ValueError("x")
            async with pool.transaction(immediate=False) as conn:
                await conn.execute("SELECT 1")
        finally:
            await pool.close()


class TestGlobalPool:
    async def test_get_pool_uses_settings(self, tmp_path: Path):
        pool = await get_pool()
        try:
            assert pool.db_path == tmp_path / "data" / "billbook.db"
            assert await get_pool() is pool
        finally:
            await close_pool()

    async def test_get_transaction(self):
        try:
            async with get_transaction(immediate=False) as conn:
                cursor = await conn.execute("SELECT 1")
                assert (await cursor.fetchone())[0] == 1
        finally:
            await close_pool()


class TestParseTimestamp:
    def test_iso(self):
        assert parse_timestamp("2024-02-03T04:05:06") == datetime(2024, 2, 3, 4, 5, 6)

    def test_sqlite_default_format(self):
        assert parse_timestamp("2024-02-03 04:05:06") == datetime(2024, 2, 3, 4, 5, 6)

    def test_bad_value_falls_back_to_now(self):
        assert isinstance(parse_timestamp("garbage"), datetime)
        assert isinstance(parse_timestamp(None), datetime)
