"""Delete Invoice Use Case."""

from billbook.config import get_logger
from billbook.core.exceptions import InvoiceNotFoundError
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork

logger = get_logger(__name__)


class DeleteInvoiceUseCase:
    """Delete one of the owner's invoices together with its items.

    Stock taken by the invoice is not returned.
    """

    def __init__(self, transaction_scope: ITransactionScope | None = None):
        self._scope = transaction_scope

    def _get_scope(self) -> ITransactionScope:
        if self._scope is None:
            from billbook.infrastructure.storage.sqlite import get_transaction_scope

            self._scope = get_transaction_scope()
        return self._scope

    async def execute(self, owner_id: int, invoice_id: int) -> None:
        async def delete_invoice(uow: UnitOfWork) -> None:
            invoice = await uow.invoices.get(invoice_id, owner_id)
            if invoice is None:
                raise InvoiceNotFoundError(invoice_id)
            await uow.invoices.delete(invoice_id, owner_id)

        await self._get_scope().run(delete_invoice)
        logger.info("invoice_removed", owner_id=owner_id, invoice_id=invoice_id)
