"""Create Invoice Use Case: validate lines, decrement stock, persist invoice.

The whole operation runs in one transaction. Lines are handled strictly in
request order and each line is validated and decremented before the next
one is looked at, so a product repeated in the same request sees the stock
already reduced by its earlier lines. Any failure rolls back every
decrement made so far and no invoice is written.
"""

from dataclasses import dataclass

from billbook.application.dto.mappers import invoice_to_response
from billbook.application.dto.requests import CreateInvoiceRequest
from billbook.application.dto.responses import InvoiceResponse
from billbook.config import get_logger
from billbook.core.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from billbook.core.exceptions import (
    BillingError,
    CustomerNotFoundError,
    DuplicateInvoiceNumberError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork
from billbook.core.services.line_items import (
    RequestedLineItem,
    checked_total,
    validate_line,
)

logger = get_logger(__name__)

# New invoices are recorded as PAID. UNPAID is still a valid stored status
# for the mark-paid path and the pending-amount figures.
INITIAL_STATUS = InvoiceStatus.PAID


@dataclass
class CreateInvoiceResult:
    """Result of creating an invoice."""

    invoice: Invoice


class CreateInvoiceUseCase:
    """Create an invoice for a customer and take its items out of stock."""

    def __init__(self, transaction_scope: ITransactionScope | None = None):
        self._scope = transaction_scope

    def _get_scope(self) -> ITransactionScope:
        if self._scope is None:
            from billbook.infrastructure.storage.sqlite import get_transaction_scope

            self._scope = get_transaction_scope()
        return self._scope

    async def execute(
        self, owner_id: int, request: CreateInvoiceRequest
    ) -> CreateInvoiceResult:
        """Execute create invoice use case from an API request."""
        invoice = await self.create_invoice(
            owner_id=owner_id,
            invoice_number=request.invoice_number,
            customer_id=request.customer_id,
            requested_items=[item.to_line() for item in request.items],
        )
        return CreateInvoiceResult(invoice=invoice)

    async def create_invoice(
        self,
        owner_id: int,
        invoice_number: str,
        customer_id: int,
        requested_items: list[RequestedLineItem],
    ) -> Invoice:
        """
        Create the invoice atomically.

        Raises:
            ValidationError: missing header fields, no items, bad quantity or rate
            CustomerNotFoundError: customer is not one of the owner's
            ProductNotFoundError: no product of that name for the owner
            InsufficientStockError: a line asks for more than is in stock
            DuplicateInvoiceNumberError: owner already used the invoice number
            PersistenceError: the store failed; nothing was written
        """
        logger.info(
            "invoice_create_started",
            owner_id=owner_id,
            invoice_number=invoice_number,
            items=len(requested_items),
        )

        if not invoice_number or not str(invoice_number).strip():
            raise ValidationError("Invoice number is required", field="invoice_number")
        if not customer_id:
            raise ValidationError("Customer is required", field="customer_id")
        if not requested_items:
            raise ValidationError("Invoice items are required", field="items")

        async def create_invoice(uow: UnitOfWork) -> Invoice:
            customer = await uow.customers.get(customer_id, owner_id)
            if customer is None:
                raise CustomerNotFoundError(customer_id)

            if await uow.invoices.find_by_number(invoice_number, owner_id):
                raise DuplicateInvoiceNumberError(invoice_number)

            items = [
                await self._take_line(uow, owner_id, line) for line in requested_items
            ]
            checked_total(items)

            invoice = Invoice(
                owner_id=owner_id,
                customer_id=customer_id,
                customer_name=customer.name,
                invoice_number=invoice_number,
                status=INITIAL_STATUS,
                items=items,
            )
            return await uow.invoices.create_with_items(invoice)

        try:
            invoice = await self._get_scope().run(create_invoice)
        except BillingError as e:
            logger.warning(
                "invoice_create_rejected",
                owner_id=owner_id,
                invoice_number=invoice_number,
                error_code=e.code,
                reason=e.message,
            )
            raise

        logger.info(
            "invoice_created",
            owner_id=owner_id,
            invoice_id=invoice.id,
            total=invoice.total,
        )
        return invoice

    @staticmethod
    async def _take_line(
        uow: UnitOfWork, owner_id: int, line: RequestedLineItem
    ) -> InvoiceItem:
        """Validate one line and decrement its product's stock."""
        quantity, rate = validate_line(line)

        product = await uow.products.find_by_name_and_owner(line.product_name, owner_id)
        if product is None:
            raise ProductNotFoundError(line.product_name)

        if product.stock < quantity:
            raise InsufficientStockError(product.name, product.stock, quantity)

        if not await uow.products.decrement_stock(product.id, quantity):  # type: ignore[arg-type]
            # Stock moved between read and write; report what is there now
            current = await uow.products.get(product.id, owner_id)  # type: ignore[arg-type]
            available = current.stock if current else 0
            raise InsufficientStockError(product.name, available, quantity)

        return InvoiceItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            rate=rate,
        )

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return invoice_to_response(result.invoice)
