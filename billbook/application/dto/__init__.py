"""Data transfer objects."""

from billbook.application.dto.mappers import (
    customer_to_response,
    invoice_to_response,
    product_to_response,
)
from billbook.application.dto.requests import (
    CreateCustomerRequest,
    CreateInvoiceRequest,
    CreateProductRequest,
    InvoiceItemRequest,
    UpdateCustomerRequest,
    UpdateInvoiceRequest,
    UpdateProductRequest,
)
from billbook.application.dto.responses import (
    CustomerListResponse,
    CustomerResponse,
    DashboardSummaryResponse,
    ErrorResponse,
    GstReportResponse,
    HealthResponse,
    InvoiceItemResponse,
    InvoiceListResponse,
    InvoiceResponse,
    MessageResponse,
    ProductListResponse,
    ProductResponse,
    ProfitLossResponse,
    SalesReportResponse,
    StockSummaryResponse,
    TopProductResponse,
    TopProductsResponse,
)

__all__ = [
    # Requests
    "CreateProductRequest",
    "UpdateProductRequest",
    "CreateCustomerRequest",
    "UpdateCustomerRequest",
    "InvoiceItemRequest",
    "CreateInvoiceRequest",
    "UpdateInvoiceRequest",
    # Responses
    "ProductResponse",
    "ProductListResponse",
    "CustomerResponse",
    "CustomerListResponse",
    "InvoiceItemResponse",
    "InvoiceResponse",
    "InvoiceListResponse",
    "MessageResponse",
    "SalesReportResponse",
    "ProfitLossResponse",
    "GstReportResponse",
    "DashboardSummaryResponse",
    "StockSummaryResponse",
    "TopProductResponse",
    "TopProductsResponse",
    "HealthResponse",
    "ErrorResponse",
    # Mappers
    "product_to_response",
    "customer_to_response",
    "invoice_to_response",
]
