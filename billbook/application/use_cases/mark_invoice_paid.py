"""Mark Invoice Paid Use Case (UNPAID to PAID, idempotent)."""

from billbook.config import get_logger
from billbook.core.entities.invoice import Invoice, InvoiceStatus
from billbook.core.exceptions import InvoiceNotFoundError
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork

logger = get_logger(__name__)


class MarkInvoicePaidUseCase:
    """Flip an invoice to PAID; already-paid invoices are returned unchanged."""

    def __init__(self, transaction_scope: ITransactionScope | None = None):
        self._scope = transaction_scope

    def _get_scope(self) -> ITransactionScope:
        if self._scope is None:
            from billbook.infrastructure.storage.sqlite import get_transaction_scope

            self._scope = get_transaction_scope()
        return self._scope

    async def execute(self, owner_id: int, invoice_id: int) -> Invoice:
        async def mark_invoice_paid(uow: UnitOfWork) -> Invoice:
            invoice = await uow.invoices.get(invoice_id, owner_id)
            if invoice is None:
                raise InvoiceNotFoundError(invoice_id)
            if invoice.is_paid:
                return invoice

            await uow.invoices.set_status(invoice_id, owner_id, InvoiceStatus.PAID)
            invoice.status = InvoiceStatus.PAID
            logger.info("invoice_marked_paid", owner_id=owner_id, invoice_id=invoice_id)
            return invoice

        return await self._get_scope().run(mark_invoice_paid)
