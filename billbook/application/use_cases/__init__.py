"""Application use cases."""

from billbook.application.use_cases.build_reports import BuildReportsUseCase
from billbook.application.use_cases.create_invoice import (
    CreateInvoiceResult,
    CreateInvoiceUseCase,
)
from billbook.application.use_cases.delete_invoice import DeleteInvoiceUseCase
from billbook.application.use_cases.manage_customers import ManageCustomersUseCase
from billbook.application.use_cases.manage_products import ManageProductsUseCase
from billbook.application.use_cases.mark_invoice_paid import MarkInvoicePaidUseCase
from billbook.application.use_cases.query_invoices import QueryInvoicesUseCase
from billbook.application.use_cases.update_invoice import UpdateInvoiceUseCase

__all__ = [
    "CreateInvoiceUseCase",
    "CreateInvoiceResult",
    "UpdateInvoiceUseCase",
    "MarkInvoicePaidUseCase",
    "DeleteInvoiceUseCase",
    "QueryInvoicesUseCase",
    "ManageProductsUseCase",
    "ManageCustomersUseCase",
    "BuildReportsUseCase",
]
