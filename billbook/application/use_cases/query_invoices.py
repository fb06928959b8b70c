"""Invoice read use cases."""

from billbook.core.entities.invoice import Invoice
from billbook.core.exceptions import InvoiceNotFoundError
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork


class QueryInvoicesUseCase:
    """List and fetch the owner's invoices."""

    def __init__(self, transaction_scope: ITransactionScope | None = None):
        self._scope = transaction_scope

    def _get_scope(self) -> ITransactionScope:
        if self._scope is None:
            from billbook.infrastructure.storage.sqlite import get_transaction_scope

            self._scope = get_transaction_scope()
        return self._scope

    async def list_invoices(self, owner_id: int) -> list[Invoice]:
        """Invoices newest first, headers and customer name only."""

        async def list_invoices(uow: UnitOfWork) -> list[Invoice]:
            return await uow.invoices.list_for_owner(owner_id)

        return await self._get_scope().run(list_invoices, read_only=True)

    async def get_invoice(self, owner_id: int, invoice_id: int) -> Invoice:
        async def get_invoice(uow: UnitOfWork) -> Invoice | None:
            return await uow.invoices.get(invoice_id, owner_id)

        invoice = await self._get_scope().run(get_invoice, read_only=True)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice
