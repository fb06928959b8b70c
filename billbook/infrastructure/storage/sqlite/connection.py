"""
aiosqlite connection pool.

Connections are opened in autocommit mode (``isolation_level=None``) and
every unit of work starts its transaction explicitly, so one connection can
carry several statements that commit or roll back together.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import aiosqlite

from billbook.config import get_logger, get_settings

logger = get_logger(__name__)

# Applied to every new connection, in order
_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Fixed-size pool of SQLite connections to one database file."""

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        async with self._lock:
            if self._initialized:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._connections.append(conn)
                self._idle.put_nowait(conn)
            self._initialized = True
        logger.info("connection_pool_opened", db_path=str(self.db_path), size=self.pool_size)

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        for pragma in _PRAGMAS:
            await conn.execute(pragma)
        # Writers blocked by BEGIN IMMEDIATE wait this long before SQLITE_BUSY
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout)}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; waits while all of them are in use."""
        if not self._initialized:
            await self.initialize()
        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self, immediate: bool = True) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside BEGIN ... COMMIT.

        ``immediate=True`` takes the write lock at BEGIN so concurrent writers
        run one after another. Any exception, cancellation included, rolls
        the transaction back before it propagates.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
            try:
                yield conn
            except BaseException:
                # SQLite may already have rolled back on some errors
                if conn.in_transaction:
                    await conn.execute("ROLLBACK")
                logger.debug("transaction_rolled_back")
                raise
            await conn.execute("COMMIT")

    async def close(self) -> None:
        async with self._lock:
            while self._connections:
                await self._connections.pop().close()
            self._idle = asyncio.Queue()
            self._initialized = False
        logger.info("connection_pool_closed", db_path=str(self.db_path))


def parse_timestamp(value: str | None) -> datetime:
    """Read a stored timestamp; unreadable values fall back to now."""
    if not value:
        return datetime.utcnow()
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        logger.warning("bad_timestamp", value=value)
        return datetime.utcnow()


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """The process-wide pool for the configured database."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction(immediate: bool = True) -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.transaction(immediate=immediate) as conn:
        yield conn
