#!/usr/bin/env python3
"""
Billbook management CLI.

Usage:
    python manage.py migrate            Apply pending database migrations
    python manage.py status             Show migration status
    python manage.py serve [--reload]   Start the API server
    python manage.py token OWNER_ID     Print an access token for local testing
"""

import argparse
import asyncio
import subprocess
import sys
from datetime import timedelta
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations to the configured database."""
    from billbook.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(initialize_database(create_backup_before=not args.no_backup))
    if not results:
        print("Database is up to date.")
        return

    for result in results:
        mark = "ok" if result.success else "FAILED"
        print(f"  v{result.version}_{result.name}: {mark} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"    {result.error}")

    if not all(r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    """Print which migrations are applied and which are pending."""
    from billbook.config import get_settings
    from billbook.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status())
    print(f"Database: {get_settings().storage.db_path}")
    if not status.exists:
        print("  not created yet")
    print(f"  current version: {status.current_version or '-'}")
    print(f"  applied: {', '.join(status.applied) or '-'}")
    print(f"  pending: {', '.join(status.pending) or '-'}")
    if status.modified:
        print(f"  edited after apply: {', '.join(status.modified)}")
    if not status.up_to_date:
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run uvicorn in the foreground."""
    from billbook.config import get_settings

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port

    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "billbook.api.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if args.reload:
        uvicorn_cmd.append("--reload")

    print(f"Starting server on {host}:{port}...")
    try:
        subprocess.run(uvicorn_cmd, cwd=str(ROOT_DIR), check=False)
    except KeyboardInterrupt:
        print("\nServer stopped.")


def cmd_token(args: argparse.Namespace) -> None:
    """Print a signed bearer token for an owner id."""
    from billbook.api.auth import create_access_token

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    print(create_access_token(args.owner_id, expires_delta=expires))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Billbook management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # token
    p_token = sub.add_parser("token", help="Print an access token")
    p_token.add_argument("owner_id", type=int, help="Owner (user) id to embed")
    p_token.add_argument("--minutes", type=int, default=None, help="Lifetime in minutes")
    p_token.set_defaults(func=cmd_token)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
