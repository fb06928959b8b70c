"""Customer endpoints."""

from fastapi import APIRouter, Depends, status

from billbook.api.auth import get_current_owner_id
from billbook.api.dependencies import get_customers_use_case
from billbook.application.dto.mappers import customer_to_response
from billbook.application.dto.requests import CreateCustomerRequest, UpdateCustomerRequest
from billbook.application.dto.responses import (
    CustomerListResponse,
    CustomerResponse,
    ErrorResponse,
    MessageResponse,
)
from billbook.application.use_cases.manage_customers import ManageCustomersUseCase

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_customer(
    request: CreateCustomerRequest,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageCustomersUseCase = Depends(get_customers_use_case),
) -> CustomerResponse:
    customer = await use_case.create(owner_id, request)
    return customer_to_response(customer)


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageCustomersUseCase = Depends(get_customers_use_case),
) -> CustomerListResponse:
    customers = await use_case.list_all(owner_id)
    return CustomerListResponse(
        customers=[customer_to_response(c) for c in customers],
        total=len(customers),
    )


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_customer(
    customer_id: int,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageCustomersUseCase = Depends(get_customers_use_case),
) -> CustomerResponse:
    customer = await use_case.get(owner_id, customer_id)
    return customer_to_response(customer)


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_customer(
    customer_id: int,
    request: UpdateCustomerRequest,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageCustomersUseCase = Depends(get_customers_use_case),
) -> CustomerResponse:
    customer = await use_case.update(owner_id, customer_id, request)
    return customer_to_response(customer)


@router.delete(
    "/{customer_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_customer(
    customer_id: int,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageCustomersUseCase = Depends(get_customers_use_case),
) -> MessageResponse:
    """Delete a customer together with all of their invoices."""
    await use_case.delete(owner_id, customer_id)
    return MessageResponse(message="Customer and related invoices deleted")
