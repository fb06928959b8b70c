"""Core domain entities."""

from billbook.core.entities.customer import Customer
from billbook.core.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from billbook.core.entities.product import Product

__all__ = [
    "Product",
    "Customer",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
]
