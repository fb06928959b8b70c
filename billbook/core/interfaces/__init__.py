"""Core interfaces (ports) for dependency injection."""

from billbook.core.interfaces.customer_repository import ICustomerRepository
from billbook.core.interfaces.invoice_repository import IInvoiceRepository
from billbook.core.interfaces.product_repository import IProductRepository
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork

__all__ = [
    "IProductRepository",
    "ICustomerRepository",
    "IInvoiceRepository",
    "ITransactionScope",
    "UnitOfWork",
]
