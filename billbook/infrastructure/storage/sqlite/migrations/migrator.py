"""
Versioned schema migrations for the billbook database.

Migration files live next to this module as ``vNNN_name.sql``. Each one is
applied in its own transaction together with its ``schema_migrations`` row,
so a failing file leaves the schema at the previous version. After every
file the billing tables and the non-negative stock guard are checked.
"""

import hashlib
import re
import shutil
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import aiosqlite

from billbook.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"v(\d{3,})_(\w+)\.sql$")

_LEDGER_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    execution_time_ms INTEGER NOT NULL DEFAULT 0,
    applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""

# Tables every migrated database must have
REQUIRED_TABLES = ("products", "customers", "invoices", "invoice_items")


@dataclass
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.match(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


@dataclass
class MigrationStatus:
    """Where a database stands against the bundled migrations."""

    exists: bool
    current_version: str | None = None
    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)

    @property
    def up_to_date(self) -> bool:
        return self.exists and not self.pending


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files sorted by version; misnamed files are skipped."""
    found = []
    for path in directory.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError:
            logger.warning("migration_file_ignored", path=str(path))
    return sorted(found, key=lambda m: int(m.version))


async def _applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    """Highest applied version, or None for an unmigrated database."""
    try:
        cursor = await conn.execute(
            "SELECT version FROM schema_migrations ORDER BY CAST(version AS INTEGER) DESC LIMIT 1"
        )
    except aiosqlite.OperationalError:
        return None
    row = await cursor.fetchone()
    return row[0] if row else None


async def check_schema(conn: aiosqlite.Connection) -> list[str]:
    """
    Return problems with the migrated schema, empty when it is usable.

    Checks that the billing tables exist, that products carry the
    ``stock >= 0`` guard and that no foreign key is dangling.
    """
    problems = []

    cursor = await conn.execute("SELECT name, sql FROM sqlite_master WHERE type = 'table'")
    tables = {name: sql or "" for name, sql in await cursor.fetchall()}

    for table in REQUIRED_TABLES:
        if table not in tables:
            problems.append(f"missing table {table}")

    products_sql = re.sub(r"\s+", "", tables.get("products", "")).lower()
    if "products" in tables and "check(stock>=0)" not in products_sql:
        problems.append("products.stock has no non-negative check")

    cursor = await conn.execute("PRAGMA foreign_key_check")
    dangling = await cursor.fetchall()
    if dangling:
        problems.append(f"{len(dangling)} foreign key violations")

    return problems


async def apply_migration(
    conn: aiosqlite.Connection, migration: MigrationInfo
) -> MigrationResult:
    """Run one migration file and record it, all in one transaction."""
    started = time.perf_counter()
    sql = migration.path.read_text(encoding="utf-8")
    record = (
        "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
        f"VALUES ('{migration.version}', '{migration.name}', '{migration.checksum}', 0);"
    )

    try:
        # executescript commits anything pending first, then runs the batch as is
        await conn.executescript(f"BEGIN;\n{sql}\n{record}\nCOMMIT;")
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.execute("ROLLBACK")
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=int((time.perf_counter() - started) * 1000),
            error=str(e),
        )

    elapsed = int((time.perf_counter() - started) * 1000)
    await conn.execute(
        "UPDATE schema_migrations SET execution_time_ms = ? WHERE version = ?",
        (elapsed, migration.version),
    )
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed,
    )
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


def create_backup(db_path: Path) -> Path:
    """Copy the database file aside before touching its schema."""
    stamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}-{stamp}.bak")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring a database up to the latest schema.

    Args:
        db_path: database file, defaults to the configured one
        create_backup_before: copy an existing file aside first and put it
            back if a migration or the schema check fails

    Returns:
        One result per migration attempted; empty when already current.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = create_backup(db_path)

    results: list[MigrationResult] = []
    problems: list[str] = []

    async with aiosqlite.connect(db_path, isolation_level=None) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        await conn.execute(_LEDGER_DDL)

        applied = await _applied_checksums(conn)
        for migration in discover_migrations():
            if migration.version in applied:
                if applied[migration.version] != migration.checksum:
                    logger.warning("migration_modified_after_apply", version=migration.version)
                continue

            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                break

            problems = await check_schema(conn)
            if problems:
                logger.error("schema_check_failed", version=migration.version, problems=problems)
                break

    failed = problems or not all(r.success for r in results)
    if backup_path is not None:
        if failed:
            restore_backup(db_path, backup_path)
        else:
            backup_path.unlink()

    logger.info(
        "database_initialized",
        db_path=str(db_path),
        applied=[r.version for r in results if r.success],
        failed=bool(failed),
    )
    return results


# Name used by the app lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> MigrationStatus:
    """Compare a database's ledger with the bundled migration files."""
    db_path = db_path or get_settings().storage.db_path
    bundled = discover_migrations()

    if not db_path.exists():
        return MigrationStatus(exists=False, pending=[m.version for m in bundled])

    async with aiosqlite.connect(db_path) as conn:
        applied = await _applied_checksums(conn)
        current = await get_current_version(conn)

    return MigrationStatus(
        exists=True,
        current_version=current,
        applied=sorted(applied, key=int),
        pending=[m.version for m in bundled if m.version not in applied],
        modified=[
            m.version
            for m in bundled
            if m.version in applied and applied[m.version] != m.checksum
        ],
    )
