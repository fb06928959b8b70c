"""Tests for update, mark-paid, delete and query invoice use cases."""

import pytest

from billbook.application.dto.requests import InvoiceItemRequest, UpdateInvoiceRequest
from billbook.application.use_cases import (
    DeleteInvoiceUseCase,
    MarkInvoicePaidUseCase,
    QueryInvoicesUseCase,
    UpdateInvoiceUseCase,
)
from billbook.core.entities import Customer, Invoice, InvoiceItem, InvoiceStatus, Product
from billbook.core.exceptions import (
    CustomerNotFoundError,
    DuplicateInvoiceNumberError,
    InvoiceNotFoundError,
    ValidationError,
)


def _stored_invoice(status: InvoiceStatus = InvoiceStatus.PAID) -> Invoice:
    return Invoice(
        id=10,
        owner_id=1,
        customer_id=5,
        invoice_number="INV-1",
        status=status,
        items=[InvoiceItem(id=1, product_name="A", quantity=1, rate=10.0)],
    )


class TestUpdateInvoiceUseCase:
    @pytest.fixture
    def use_case(self, recording_scope):
        return UpdateInvoiceUseCase(transaction_scope=recording_scope)

    async def test_replaces_items_and_recomputes_total(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice()
        mock_uow.products.find_by_name_and_owner.return_value = Product(
            id=3, owner_id=1, name="B", rate=20.0, stock=0
        )

        request = UpdateInvoiceRequest(
            items=[InvoiceItemRequest(product_name="B", quantity=4, rate=20)]
        )
        await use_case.execute(1, 10, request)

        replaced = mock_uow.invoices.replace_items.call_args[0][0]
        assert replaced.total == 80.0
        assert [(i.product_id, i.quantity) for i in replaced.items] == [(3, 4)]
        mock_uow.products.decrement_stock.assert_not_awaited()

    async def test_empty_items_rejected(self, use_case, recording_scope):
        with pytest.raises(ValidationError, match="Invoice items are required"):
            await use_case.execute(1, 10, UpdateInvoiceRequest(items=[]))
        assert recording_scope.calls == []

    async def test_bad_quantity_rejected(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice()
        mock_uow.products.find_by_name_and_owner.return_value = None
        request = UpdateInvoiceRequest(
            items=[InvoiceItemRequest(product_name="A", quantity=1.5, rate=1)]
        )
        with pytest.raises(ValidationError, match="Invalid quantity for A"):
            await use_case.execute(1, 10, request)
        mock_uow.invoices.replace_items.assert_not_awaited()

    async def test_overflowing_total_rejected(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice()
        mock_uow.products.find_by_name_and_owner.return_value = None
        request = UpdateInvoiceRequest(
            items=[
                InvoiceItemRequest(product_name="A", quantity=1, rate=1e308),
                InvoiceItemRequest(product_name="B", quantity=1, rate=1e308),
            ]
        )
        with pytest.raises(ValidationError, match="Invalid rate for B"):
            await use_case.execute(1, 10, request)
        mock_uow.invoices.replace_items.assert_not_awaited()

    async def test_missing_invoice(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = None
        request = UpdateInvoiceRequest(
            items=[InvoiceItemRequest(product_name="A", quantity=1, rate=1)]
        )
        with pytest.raises(InvoiceNotFoundError):
            await use_case.execute(1, 10, request)

    async def test_unknown_new_customer(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice()
        mock_uow.customers.get.return_value = None
        request = UpdateInvoiceRequest(
            customer_id=77,
            items=[InvoiceItemRequest(product_name="A", quantity=1, rate=1)],
        )
        with pytest.raises(CustomerNotFoundError):
            await use_case.execute(1, 10, request)

    async def test_new_number_must_be_free(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice()
        mock_uow.invoices.find_by_number.return_value = Invoice(
            id=11, owner_id=1, customer_id=5, invoice_number="INV-2"
        )
        request = UpdateInvoiceRequest(
            invoice_number="INV-2",
            items=[InvoiceItemRequest(product_name="A", quantity=1, rate=1)],
        )
        with pytest.raises(DuplicateInvoiceNumberError):
            await use_case.execute(1, 10, request)

    async def test_customer_change_applied(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice()
        mock_uow.customers.get.return_value = Customer(
            id=6, owner_id=1, name="Asha", phone="901"
        )
        mock_uow.products.find_by_name_and_owner.return_value = None
        request = UpdateInvoiceRequest(
            customer_id=6,
            items=[InvoiceItemRequest(product_name="A", quantity=1, rate=1)],
        )
        await use_case.execute(1, 10, request)
        assert mock_uow.invoices.replace_items.call_args[0][0].customer_id == 6


class TestMarkInvoicePaidUseCase:
    @pytest.fixture
    def use_case(self, recording_scope):
        return MarkInvoicePaidUseCase(transaction_scope=recording_scope)

    async def test_unpaid_becomes_paid(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice(InvoiceStatus.UNPAID)
        invoice = await use_case.execute(1, 10)
        assert invoice.status == InvoiceStatus.PAID
        mock_uow.invoices.set_status.assert_awaited_once_with(10, 1, InvoiceStatus.PAID)

    async def test_already_paid_is_unchanged(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice(InvoiceStatus.PAID)
        invoice = await use_case.execute(1, 10)
        assert invoice.is_paid
        mock_uow.invoices.set_status.assert_not_awaited()

    async def test_missing(self, use_case, mock_uow):
        mock_uow.invoices.get.return_value = None
        with pytest.raises(InvoiceNotFoundError):
            await use_case.execute(1, 10)


class TestDeleteInvoiceUseCase:
    async def test_deletes_owned_invoice(self, recording_scope, mock_uow):
        mock_uow.invoices.get.return_value = _stored_invoice()
        await DeleteInvoiceUseCase(recording_scope).execute(1, 10)
        mock_uow.invoices.delete.assert_awaited_once_with(10, 1)

    async def test_other_owners_invoice_not_found(self, recording_scope, mock_uow):
        mock_uow.invoices.get.return_value = None
        with pytest.raises(InvoiceNotFoundError):
            await DeleteInvoiceUseCase(recording_scope).execute(2, 10)
        mock_uow.invoices.delete.assert_not_awaited()


class TestQueryInvoicesUseCase:
    async def test_reads_are_read_only(self, recording_scope, mock_uow):
        mock_uow.invoices.list_for_owner.return_value = [_stored_invoice()]
        mock_uow.invoices.get.return_value = _stored_invoice()
        use_case = QueryInvoicesUseCase(recording_scope)

        assert len(await use_case.list_invoices(1)) == 1
        assert (await use_case.get_invoice(1, 10)).id == 10
        assert all(read_only for _, read_only in recording_scope.calls)

    async def test_get_missing(self, recording_scope, mock_uow):
        mock_uow.invoices.get.return_value = None
        with pytest.raises(InvoiceNotFoundError):
            await QueryInvoicesUseCase(recording_scope).get_invoice(1, 10)
