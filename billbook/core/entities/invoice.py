"""Invoice domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class InvoiceStatus(str, Enum):
    """Payment status of an invoice."""

    UNPAID = "UNPAID"
    PAID = "PAID"


class InvoiceItem(BaseModel):
    """
    Snapshot of one product line at invoicing time.

    Name, quantity and rate are copied from the request so the invoice stays
    stable when the live product changes later.
    """

    id: int | None = None
    invoice_id: int | None = None
    product_id: int | None = None
    product_name: str
    quantity: int
    rate: float
    amount: float = 0.0  # quantity * rate

    @model_validator(mode="after")
    def compute_amount(self) -> "InvoiceItem":
        """Compute amount from quantity and rate."""
        self.amount = self.quantity * self.rate
        return self


class Invoice(BaseModel):
    """An invoice with its line items."""

    id: int | None = None
    owner_id: int
    customer_id: int
    customer_name: str | None = None  # joined for listings
    invoice_number: str
    status: InvoiceStatus = InvoiceStatus.PAID
    total: float = 0.0
    items: list[InvoiceItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def compute_total(self) -> "Invoice":
        """Compute total as the sum of item amounts."""
        if self.items:
            self.total = sum(i.amount for i in self.items)
        return self

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID
