"""SQLite storage implementations."""

from billbook.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from billbook.infrastructure.storage.sqlite.customer_repository import (
    SQLiteCustomerRepository,
)
from billbook.infrastructure.storage.sqlite.invoice_repository import (
    SQLiteInvoiceRepository,
)
from billbook.infrastructure.storage.sqlite.product_repository import (
    SQLiteProductRepository,
)
from billbook.infrastructure.storage.sqlite.transaction import (
    SQLiteTransactionScope,
    build_unit_of_work,
)

# Aliases used by the app lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instance
_transaction_scope: SQLiteTransactionScope | None = None


def get_transaction_scope() -> SQLiteTransactionScope:
    """Get singleton transaction scope bound to the global pool."""
    global _transaction_scope
    if _transaction_scope is None:
        _transaction_scope = SQLiteTransactionScope()
    return _transaction_scope


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_connection_pool",
    "close_connection_pool",
    # Repositories
    "SQLiteProductRepository",
    "SQLiteCustomerRepository",
    "SQLiteInvoiceRepository",
    # Transactions
    "SQLiteTransactionScope",
    "build_unit_of_work",
    "get_transaction_scope",
]
