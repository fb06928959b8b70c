"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ProductResponse(BaseModel):
    """Product response DTO."""

    id: int = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    rate: float = Field(..., description="Rate per unit")
    unit: str | None = Field(default=None, description="Unit of measure")
    stock: int = Field(..., description="Units in stock")
    is_active: bool = Field(..., description="False once soft-deleted")
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    products: list[ProductResponse] = Field(default_factory=list)
    total: int = 0


class CustomerResponse(BaseModel):
    """Customer response DTO."""

    id: int = Field(..., description="Customer ID")
    name: str = Field(..., description="Customer name")
    phone: str = Field(..., description="Phone number")
    created_at: datetime
    updated_at: datetime


class CustomerListResponse(BaseModel):
    customers: list[CustomerResponse] = Field(default_factory=list)
    total: int = 0


class InvoiceItemResponse(BaseModel):
    """Invoice line snapshot."""

    id: int = Field(..., description="Item ID")
    product_id: int | None = Field(default=None, description="Product at invoicing time")
    product_name: str = Field(..., description="Product name snapshot")
    quantity: int = Field(..., description="Units sold")
    rate: float = Field(..., description="Rate snapshot")
    amount: float = Field(..., description="quantity * rate")


class InvoiceResponse(BaseModel):
    """Invoice response DTO."""

    id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Invoice number")
    customer_id: int = Field(..., description="Customer ID")
    customer_name: str | None = Field(default=None, description="Customer name")
    status: str = Field(..., description="UNPAID or PAID")
    total: float = Field(..., description="Sum of item amounts")
    items: list[InvoiceItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class InvoiceListResponse(BaseModel):
    invoices: list[InvoiceResponse] = Field(default_factory=list)
    total: int = 0


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


# --- Reports ---


class SalesReportResponse(BaseModel):
    invoices: list[InvoiceResponse] = Field(default_factory=list)
    total: float = 0.0


class MonthlyProfitLossResponse(BaseModel):
    month: str = Field(..., description="YYYY-MM")
    revenue: float
    expense: float


class ProfitLossResponse(BaseModel):
    revenue: float
    cost: float
    profit: float
    monthly: list[MonthlyProfitLossResponse] = Field(default_factory=list)


class MonthlyGstResponse(BaseModel):
    month: str = Field(..., description="YYYY-MM")
    taxable: float
    output: float
    input: float


class GstReportResponse(BaseModel):
    taxable_sales: int
    output_gst: int
    input_gst: int
    net_gst: int
    monthly: list[MonthlyGstResponse] = Field(default_factory=list)


class DashboardSummaryResponse(BaseModel):
    total_sales: float
    received_amount: float
    pending_amount: float


class StockSummaryResponse(BaseModel):
    total_products: int
    active_products: int
    total_stock: int
    low_stock_count: int


class TopProductResponse(BaseModel):
    product_name: str = Field(..., description="Product name snapshot")
    quantity: int = Field(..., description="Units sold this month")


class TopProductsResponse(BaseModel):
    products: list[TopProductResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="healthy or degraded")
    version: str
    database: bool = Field(..., description="Database reachable")


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
