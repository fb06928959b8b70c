"""Update Invoice Use Case: replace all items and recompute the total."""

from billbook.application.dto.requests import UpdateInvoiceRequest
from billbook.config import get_logger
from billbook.core.entities.invoice import Invoice
from billbook.core.exceptions import (
    CustomerNotFoundError,
    DuplicateInvoiceNumberError,
    InvoiceNotFoundError,
    ValidationError,
)
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork
from billbook.core.services.line_items import build_items, checked_total

logger = get_logger(__name__)


class UpdateInvoiceUseCase:
    """
    Replace an invoice's items wholesale.

    Old items are deleted and the new ones inserted in the same transaction
    as the header update. Stock is not touched.
    """

    def __init__(self, transaction_scope: ITransactionScope | None = None):
        self._scope = transaction_scope

    def _get_scope(self) -> ITransactionScope:
        if self._scope is None:
            from billbook.infrastructure.storage.sqlite import get_transaction_scope

            self._scope = get_transaction_scope()
        return self._scope

    async def execute(
        self, owner_id: int, invoice_id: int, request: UpdateInvoiceRequest
    ) -> Invoice:
        """Execute update invoice use case."""
        if not request.items:
            raise ValidationError("Invoice items are required", field="items")

        lines = [item.to_line() for item in request.items]

        async def update_invoice(uow: UnitOfWork) -> Invoice:
            invoice = await uow.invoices.get(invoice_id, owner_id)
            if invoice is None:
                raise InvoiceNotFoundError(invoice_id)

            if request.customer_id is not None and request.customer_id != invoice.customer_id:
                customer = await uow.customers.get(request.customer_id, owner_id)
                if customer is None:
                    raise CustomerNotFoundError(request.customer_id)
                invoice.customer_id = customer.id  # type: ignore[assignment]

            number = request.invoice_number
            if number and number != invoice.invoice_number:
                if await uow.invoices.find_by_number(number, owner_id):
                    raise DuplicateInvoiceNumberError(number)
                invoice.invoice_number = number

            product_ids = {}
            for line in lines:
                product = await uow.products.find_by_name_and_owner(
                    line.product_name, owner_id
                )
                if product is not None:
                    product_ids[line.product_name] = product.id

            invoice.items = build_items(lines, product_ids)
            invoice.total = checked_total(invoice.items)
            await uow.invoices.replace_items(invoice)

            return await uow.invoices.get(invoice_id, owner_id)  # type: ignore[return-value]

        invoice = await self._get_scope().run(update_invoice)
        logger.info(
            "invoice_updated",
            owner_id=owner_id,
            invoice_id=invoice_id,
            items=len(invoice.items),
            total=invoice.total,
        )
        return invoice
