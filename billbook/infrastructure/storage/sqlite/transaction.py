"""
SQLite transaction scope.

Binds every repository of a UnitOfWork to one pooled connection inside one
explicit transaction, so the work either commits as a whole or leaves no
trace.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import aiosqlite

from billbook.config import get_logger
from billbook.core.exceptions import PersistenceError
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork
from billbook.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool
from billbook.infrastructure.storage.sqlite.customer_repository import (
    SQLiteCustomerRepository,
)
from billbook.infrastructure.storage.sqlite.invoice_repository import (
    SQLiteInvoiceRepository,
)
from billbook.infrastructure.storage.sqlite.product_repository import (
    SQLiteProductRepository,
)

logger = get_logger(__name__)

T = TypeVar("T")


def build_unit_of_work(conn: aiosqlite.Connection) -> UnitOfWork:
    """Create repositories sharing one connection."""
    return UnitOfWork(
        products=SQLiteProductRepository(conn),
        customers=SQLiteCustomerRepository(conn),
        invoices=SQLiteInvoiceRepository(conn),
    )


class SQLiteTransactionScope(ITransactionScope):
    """
    Runs a unit of work in a single SQLite transaction.

    Writes use BEGIN IMMEDIATE: the database write lock is held from the
    first statement until COMMIT/ROLLBACK, so two invoice creations touching
    the same product cannot both read the pre-decrement stock. Read-only
    work uses a deferred transaction and does not block writers under WAL.

    Domain errors raised by the work propagate unchanged after rollback;
    driver errors are rolled back and surfaced as PersistenceError.
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    async def _get_pool(self) -> ConnectionPool:
        # Without an explicit pool, follow the global one across close/reopen
        if self._pool is None:
            return await get_pool()
        return self._pool

    async def run(
        self,
        work: Callable[[UnitOfWork], Awaitable[T]],
        read_only: bool = False,
    ) -> T:
        pool = await self._get_pool()
        try:
            async with pool.transaction(immediate=not read_only) as conn:
                return await work(build_unit_of_work(conn))
        except aiosqlite.Error as e:
            operation = getattr(work, "__name__", "unit_of_work")
            logger.error(
                "transaction_failed",
                operation=operation,
                error=str(e),
            )
            raise PersistenceError(operation, str(e)) from e
