"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Line item quantity and rate are accepted loosely (numbers or numeric
strings) so that the use case, not the schema layer, reports which item is
invalid.
"""

from pydantic import BaseModel, Field

from billbook.core.services.line_items import RequestedLineItem


# --- Products ---


class CreateProductRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., description="Product name, unique per owner")
    rate: float = Field(..., description="Selling rate per unit")
    unit: str | None = Field(default=None, description="Unit of measure")
    stock: int = Field(default=0, description="Opening stock")


class UpdateProductRequest(BaseModel):
    """Partial product update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, description="New product name")
    rate: float | None = Field(default=None, description="New rate")
    unit: str | None = Field(default=None, description="New unit")
    stock: int | None = Field(default=None, description="Restocked quantity")
    is_active: bool | None = Field(default=None, description="Active flag")


# --- Customers ---


class CreateCustomerRequest(BaseModel):
    """Request to create a customer."""

    name: str = Field(..., description="Customer name")
    phone: str = Field(..., description="Phone number, unique per owner")


class UpdateCustomerRequest(BaseModel):
    """Partial customer update."""

    name: str | None = Field(default=None, description="New name")
    phone: str | None = Field(default=None, description="New phone")


# --- Invoices ---


class InvoiceItemRequest(BaseModel):
    """A single requested line on an invoice."""

    product_name: str = Field(..., description="Exact product name")
    quantity: int | float | str = Field(..., description="Whole number of units")
    rate: int | float | str = Field(..., description="Rate per unit")

    def to_line(self) -> RequestedLineItem:
        return RequestedLineItem(
            product_name=self.product_name,
            quantity=self.quantity,
            rate=self.rate,
        )


class CreateInvoiceRequest(BaseModel):
    """Request to create an invoice and decrement stock."""

    invoice_number: str = Field(..., description="Invoice number", examples=["INV-001"])
    customer_id: int = Field(..., description="Customer ID")
    items: list[InvoiceItemRequest] = Field(
        default_factory=list, description="Line items, processed in order"
    )


class UpdateInvoiceRequest(BaseModel):
    """Request to replace an invoice's items and optionally its header."""

    invoice_number: str | None = Field(default=None, description="New invoice number")
    customer_id: int | None = Field(default=None, description="New customer ID")
    items: list[InvoiceItemRequest] = Field(
        default_factory=list, description="Replacement line items"
    )
