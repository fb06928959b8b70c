"""Invoice endpoints."""

from fastapi import APIRouter, Depends, status

from billbook.api.auth import get_current_owner_id
from billbook.api.dependencies import (
    get_create_invoice_use_case,
    get_delete_invoice_use_case,
    get_mark_invoice_paid_use_case,
    get_query_invoices_use_case,
    get_update_invoice_use_case,
)
from billbook.application.dto.mappers import invoice_to_response
from billbook.application.dto.requests import CreateInvoiceRequest, UpdateInvoiceRequest
from billbook.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
    MessageResponse,
)
from billbook.application.use_cases.create_invoice import CreateInvoiceUseCase
from billbook.application.use_cases.delete_invoice import DeleteInvoiceUseCase
from billbook.application.use_cases.mark_invoice_paid import MarkInvoicePaidUseCase
from billbook.application.use_cases.query_invoices import QueryInvoicesUseCase
from billbook.application.use_cases.update_invoice import UpdateInvoiceUseCase

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid header or line item"},
        404: {"model": ErrorResponse, "description": "Unknown customer or product"},
        409: {"model": ErrorResponse, "description": "Insufficient stock or duplicate number"},
    },
)
async def create_invoice(
    request: CreateInvoiceRequest,
    owner_id: int = Depends(get_current_owner_id),
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """
    Create an invoice and take its items out of stock.

    All-or-nothing: on any error no invoice is stored and no stock changes.
    """
    result = await use_case.execute(owner_id, request)
    return use_case.to_response(result)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    owner_id: int = Depends(get_current_owner_id),
    use_case: QueryInvoicesUseCase = Depends(get_query_invoices_use_case),
) -> InvoiceListResponse:
    """List the owner's invoices, newest first."""
    invoices = await use_case.list_invoices(owner_id)
    return InvoiceListResponse(
        invoices=[invoice_to_response(inv) for inv in invoices],
        total=len(invoices),
    )


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: int,
    owner_id: int = Depends(get_current_owner_id),
    use_case: QueryInvoicesUseCase = Depends(get_query_invoices_use_case),
) -> InvoiceResponse:
    """Get an invoice with its items."""
    invoice = await use_case.get_invoice(owner_id, invoice_id)
    return invoice_to_response(invoice)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_invoice(
    invoice_id: int,
    request: UpdateInvoiceRequest,
    owner_id: int = Depends(get_current_owner_id),
    use_case: UpdateInvoiceUseCase = Depends(get_update_invoice_use_case),
) -> InvoiceResponse:
    """Replace an invoice's items and recompute its total."""
    invoice = await use_case.execute(owner_id, invoice_id, request)
    return invoice_to_response(invoice)


@router.put(
    "/{invoice_id}/pay",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def mark_invoice_paid(
    invoice_id: int,
    owner_id: int = Depends(get_current_owner_id),
    use_case: MarkInvoicePaidUseCase = Depends(get_mark_invoice_paid_use_case),
) -> InvoiceResponse:
    invoice = await use_case.execute(owner_id, invoice_id)
    return invoice_to_response(invoice)


@router.delete(
    "/{invoice_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_invoice(
    invoice_id: int,
    owner_id: int = Depends(get_current_owner_id),
    use_case: DeleteInvoiceUseCase = Depends(get_delete_invoice_use_case),
) -> MessageResponse:
    await use_case.execute(owner_id, invoice_id)
    return MessageResponse(message="Invoice deleted")
