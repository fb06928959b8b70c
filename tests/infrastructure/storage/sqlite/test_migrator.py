"""Tests for the schema migrator."""

from pathlib import Path

import aiosqlite
import pytest

from billbook.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    apply_migration,
    check_schema,
    create_backup,
    discover_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_backup,
)


class TestMigrationInfo:
    """Tests for MigrationInfo dataclass."""

    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("-- Test migration\nSELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert len(info.checksum) == 16  # First 16 chars of SHA-256

    def test_from_file_invalid_name(self, tmp_path: Path):
        bad = tmp_path / "initial.sql"
        bad.write_text("SELECT 1;")
        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(bad)


class TestDiscoverMigrations:
    def test_bundled_initial_migration(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert versions == sorted(versions)


class TestInitializeDatabase:
    async def test_creates_schema(self, tmp_path: Path):
        db_path = tmp_path / "fresh.db"
        results = await initialize_database(db_path, create_backup_before=False)

        assert [r.success for r in results] == [True]
        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
            )
            tables = {row[0] for row in await cursor.fetchall()}
            assert {"products", "customers", "invoices", "invoice_items"} <= tables
            assert await get_current_version(conn) == "001"

    async def test_second_run_applies_nothing(self, db_path: Path):
        assert await initialize_database(db_path) == []

    async def test_stock_cannot_go_negative(self, db_path: Path):
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute(
                "INSERT INTO products (owner_id, name, rate, stock) VALUES (1, 'A', 1, 1)"
            )
            with pytest.raises(aiosqlite.IntegrityError):
                await conn.execute("UPDATE products SET stock = stock - 2 WHERE name = 'A'")


class TestApplyMigration:
    async def test_failing_file_leaves_no_trace(self, tmp_path: Path):
        broken = tmp_path / "v002_broken.sql"
        broken.write_text("CREATE TABLE half_done (id INTEGER);\nINSERT INTO nowhere VALUES (1);")
        migration = MigrationInfo.from_file(broken)

        async with aiosqlite.connect(tmp_path / "x.db", isolation_level=None) as conn:
            await conn.execute(
                "CREATE TABLE schema_migrations (version TEXT PRIMARY KEY, name TEXT, "
                "checksum TEXT, execution_time_ms INTEGER, applied_at TIMESTAMP)"
            )
            result = await apply_migration(conn, migration)

            assert result.success is False
            assert "nowhere" in result.error
            cursor = await conn.execute(
                "SELECT name FROM sqlite_master WHERE name = 'half_done'"
            )
            assert await cursor.fetchone() is None
            assert await get_current_version(conn) is None


class TestCheckSchema:
    async def test_empty_database(self, tmp_path: Path):
        async with aiosqlite.connect(tmp_path / "empty.db") as conn:
            problems = await check_schema(conn)
        assert "missing table products" in problems
        assert len(problems) == 4

    async def test_migrated_database(self, db_path: Path):
        async with aiosqlite.connect(db_path) as conn:
            assert await check_schema(conn) == []

    async def test_products_without_stock_guard(self, tmp_path: Path):
        async with aiosqlite.connect(tmp_path / "loose.db") as conn:
            await conn.execute("CREATE TABLE products (id INTEGER, stock INTEGER)")
            problems = await check_schema(conn)
        assert "products.stock has no non-negative check" in problems


class TestMigrationStatus:
    async def test_missing_database(self, tmp_path: Path):
        status = await get_migration_status(tmp_path / "nope.db")
        assert status.exists is False
        assert status.pending == ["001"]
        assert not status.up_to_date

    async def test_migrated_database(self, db_path: Path):
        status = await get_migration_status(db_path)
        assert status.current_version == "001"
        assert status.applied == ["001"]
        assert status.pending == []
        assert status.modified == []
        assert status.up_to_date

    async def test_edited_migration_is_reported(self, db_path: Path):
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("UPDATE schema_migrations SET checksum = 'stale'")
            await conn.commit()

        status = await get_migration_status(db_path)
        assert status.modified == ["001"]


class TestBackup:
    def test_backup_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "x.db"
        db_path.write_bytes(b"original")
        backup = create_backup(db_path)

        db_path.write_bytes(b"changed")
        restore_backup(db_path, backup)

        assert db_path.read_bytes() == b"original"
        assert backup.suffix == ".bak"

    async def test_backup_removed_after_clean_run(self, tmp_path: Path):
        db_path = tmp_path / "fresh.db"
        await initialize_database(db_path, create_backup_before=False)
        await initialize_database(db_path)

        assert list(tmp_path.glob("*.bak")) == []
