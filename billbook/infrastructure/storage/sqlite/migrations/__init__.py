"""Database migrations module."""

from billbook.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    MigrationStatus,
    check_schema,
    create_backup,
    discover_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    restore_backup,
    run_migrations,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "MigrationStatus",
    "check_schema",
    "create_backup",
    "discover_migrations",
    "get_current_version",
    "get_migration_status",
    "initialize_database",
    "restore_backup",
    "run_migrations",
]
