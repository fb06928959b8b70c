"""Abstract interface for invoice persistence."""

from abc import ABC, abstractmethod

from billbook.core.entities.invoice import Invoice, InvoiceStatus


class IInvoiceRepository(ABC):
    """Interface for invoice and invoice item persistence."""

    @abstractmethod
    async def create_with_items(self, invoice: Invoice) -> Invoice:
        """Insert the invoice header and all its items as one unit."""
        pass

    @abstractmethod
    async def get(self, invoice_id: int, owner_id: int) -> Invoice | None:
        """Get an invoice with items and customer name if owned by owner_id."""
        pass

    @abstractmethod
    async def find_by_number(self, invoice_number: str, owner_id: int) -> Invoice | None:
        """Find the owner's invoice with this number (header only)."""
        pass

    @abstractmethod
    async def list_for_owner(
        self, owner_id: int, with_items: bool = False
    ) -> list[Invoice]:
        """List the owner's invoices, newest first."""
        pass

    @abstractmethod
    async def replace_items(self, invoice: Invoice) -> Invoice:
        """Update the header and swap every existing item for invoice.items."""
        pass

    @abstractmethod
    async def set_status(
        self, invoice_id: int, owner_id: int, status: InvoiceStatus
    ) -> None:
        """Set the payment status of one of the owner's invoices."""
        pass

    @abstractmethod
    async def delete(self, invoice_id: int, owner_id: int) -> None:
        """Delete one of the owner's invoices and its items."""
        pass

    @abstractmethod
    async def delete_for_customer(self, customer_id: int, owner_id: int) -> int:
        """Delete every invoice (and items) the owner holds for a customer. Returns count."""
        pass
