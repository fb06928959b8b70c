"""Tests for CreateInvoiceUseCase."""

import pytest

from billbook.application.dto.requests import CreateInvoiceRequest, InvoiceItemRequest
from billbook.application.use_cases.create_invoice import CreateInvoiceUseCase
from billbook.core.entities import Customer, Invoice, InvoiceStatus, Product
from billbook.core.exceptions import (
    CustomerNotFoundError,
    DuplicateInvoiceNumberError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from billbook.core.services.line_items import RequestedLineItem


@pytest.fixture
def use_case(recording_scope):
    return CreateInvoiceUseCase(transaction_scope=recording_scope)


@pytest.fixture
def stocked(mock_uow):
    """Customer 5 exists, invoice number is free, product A has 10 in stock."""
    mock_uow.customers.get.return_value = Customer(id=5, owner_id=1, name="Ravi", phone="900")
    mock_uow.invoices.find_by_number.return_value = None
    mock_uow.products.find_by_name_and_owner.return_value = Product(
        id=1, owner_id=1, name="A", rate=50.0, stock=10
    )
    mock_uow.products.decrement_stock.return_value = True

    async def create_with_items(invoice: Invoice) -> Invoice:
        invoice.id = 100
        for n, item in enumerate(invoice.items, 1):
            item.id = n
        return invoice

    mock_uow.invoices.create_with_items.side_effect = create_with_items
    return mock_uow


class TestCreateInvoiceUseCase:
    async def test_creates_invoice_and_decrements(self, use_case, stocked):
        invoice = await use_case.create_invoice(
            owner_id=1,
            invoice_number="INV-1",
            customer_id=5,
            requested_items=[RequestedLineItem("A", 3, 50.0)],
        )

        assert invoice.id == 100
        assert invoice.total == 150.0
        assert invoice.items[0].amount == 150.0
        assert invoice.items[0].product_id == 1
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.customer_name == "Ravi"
        stocked.products.decrement_stock.assert_awaited_once_with(1, 3)

    async def test_runs_as_one_write_transaction(self, use_case, stocked, recording_scope):
        await use_case.create_invoice(1, "INV-1", 5, [RequestedLineItem("A", 1, 1)])
        assert recording_scope.calls == [("create_invoice", False)]

    async def test_execute_from_request(self, use_case, stocked):
        request = CreateInvoiceRequest(
            invoice_number="INV-2",
            customer_id=5,
            items=[InvoiceItemRequest(product_name="A", quantity=2, rate="12.5")],
        )
        result = await use_case.execute(1, request)
        response = use_case.to_response(result)
        assert response.total == 25.0
        assert response.status == "PAID"

    async def test_lines_are_validated_and_taken_in_order(self, use_case, stocked):
        """Line 1 is already decremented when line 2 fails validation."""
        with pytest.raises(ValidationError, match="Invalid quantity for B"):
            await use_case.create_invoice(
                1, "INV-1", 5,
                [RequestedLineItem("A", 1, 10), RequestedLineItem("B", 0, 10)],
            )
        stocked.products.decrement_stock.assert_awaited_once_with(1, 1)
        stocked.invoices.create_with_items.assert_not_awaited()

    async def test_invalid_rate(self, use_case, stocked):
        with pytest.raises(ValidationError, match="Invalid rate for A"):
            await use_case.create_invoice(1, "INV-1", 5, [RequestedLineItem("A", 1, -5)])

    async def test_unknown_product(self, use_case, stocked):
        stocked.products.find_by_name_and_owner.return_value = None
        with pytest.raises(ProductNotFoundError, match="Product not found: Z"):
            await use_case.create_invoice(1, "INV-1", 5, [RequestedLineItem("Z", 1, 1)])
        stocked.invoices.create_with_items.assert_not_awaited()

    async def test_insufficient_stock_before_decrement(self, use_case, stocked):
        stocked.products.find_by_name_and_owner.return_value = Product(
            id=1, owner_id=1, name="A", rate=50.0, stock=2
        )
        with pytest.raises(InsufficientStockError) as exc_info:
            await use_case.create_invoice(1, "INV-1", 5, [RequestedLineItem("A", 5, 50)])
        assert str(exc_info.value) == "Insufficient stock for A. Available: 2"
        stocked.products.decrement_stock.assert_not_awaited()

    async def test_refused_decrement_reports_current_stock(self, use_case, stocked):
        stocked.products.decrement_stock.return_value = False
        stocked.products.get.return_value = Product(
            id=1, owner_id=1, name="A", rate=50.0, stock=1
        )
        with pytest.raises(InsufficientStockError, match="Available: 1"):
            await use_case.create_invoice(1, "INV-1", 5, [RequestedLineItem("A", 3, 50)])

    async def test_unknown_customer(self, use_case, stocked):
        stocked.customers.get.return_value = None
        with pytest.raises(CustomerNotFoundError):
            await use_case.create_invoice(1, "INV-1", 99, [RequestedLineItem("A", 1, 1)])
        stocked.products.decrement_stock.assert_not_awaited()

    async def test_duplicate_invoice_number(self, use_case, stocked):
        stocked.invoices.find_by_number.return_value = Invoice(
            id=1, owner_id=1, customer_id=5, invoice_number="INV-1"
        )
        with pytest.raises(DuplicateInvoiceNumberError):
            await use_case.create_invoice(1, "INV-1", 5, [RequestedLineItem("A", 1, 1)])

    @pytest.mark.parametrize(
        "number, customer_id, items, field",
        [
            ("", 5, [RequestedLineItem("A", 1, 1)], "invoice_number"),
            ("  ", 5, [RequestedLineItem("A", 1, 1)], "invoice_number"),
            ("INV-1", 0, [RequestedLineItem("A", 1, 1)], "customer_id"),
            ("INV-1", 5, [], "items"),
        ],
    )
    async def test_header_validation_skips_transaction(
        self, use_case, recording_scope, number, customer_id, items, field
    ):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.create_invoice(1, number, customer_id, items)
        assert exc_info.value.details["field"] == field
        assert recording_scope.calls == []
