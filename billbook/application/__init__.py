"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that run core logic inside a transaction scope

Use cases are the only entry point for API handlers.
"""

from billbook.application.use_cases import (
    BuildReportsUseCase,
    CreateInvoiceResult,
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    ManageCustomersUseCase,
    ManageProductsUseCase,
    MarkInvoicePaidUseCase,
    QueryInvoicesUseCase,
    UpdateInvoiceUseCase,
)

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
