"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers.
"""

from functools import lru_cache

from billbook.application.use_cases import (
    BuildReportsUseCase,
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    ManageCustomersUseCase,
    ManageProductsUseCase,
    MarkInvoicePaidUseCase,
    QueryInvoicesUseCase,
    UpdateInvoiceUseCase,
)
from billbook.config import Settings, get_settings


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Use case dependencies
def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    """Get create invoice use case."""
    return CreateInvoiceUseCase()


def get_update_invoice_use_case() -> UpdateInvoiceUseCase:
    return UpdateInvoiceUseCase()


def get_mark_invoice_paid_use_case() -> MarkInvoicePaidUseCase:
    return MarkInvoicePaidUseCase()


def get_delete_invoice_use_case() -> DeleteInvoiceUseCase:
    return DeleteInvoiceUseCase()


def get_query_invoices_use_case() -> QueryInvoicesUseCase:
    return QueryInvoicesUseCase()


def get_products_use_case() -> ManageProductsUseCase:
    """Get product catalog use case."""
    return ManageProductsUseCase()


def get_customers_use_case() -> ManageCustomersUseCase:
    """Get customer use case."""
    return ManageCustomersUseCase()


def get_reports_use_case() -> BuildReportsUseCase:
    """Get reports use case."""
    return BuildReportsUseCase()
