"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, status

from billbook.api.auth import get_current_owner_id
from billbook.api.dependencies import get_products_use_case
from billbook.application.dto.mappers import product_to_response
from billbook.application.dto.requests import CreateProductRequest, UpdateProductRequest
from billbook.application.dto.responses import (
    ErrorResponse,
    MessageResponse,
    ProductListResponse,
    ProductResponse,
)
from billbook.application.use_cases.manage_products import ManageProductsUseCase

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_product(
    request: CreateProductRequest,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageProductsUseCase = Depends(get_products_use_case),
) -> ProductResponse:
    """Add a product to the owner's catalog."""
    product = await use_case.create(owner_id, request)
    return product_to_response(product)


@router.get("", response_model=ProductListResponse)
async def list_products(
    include_inactive: bool = False,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageProductsUseCase = Depends(get_products_use_case),
) -> ProductListResponse:
    """List the owner's products, newest first."""
    products = await use_case.list_all(owner_id, include_inactive=include_inactive)
    return ProductListResponse(
        products=[product_to_response(p) for p in products],
        total=len(products),
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageProductsUseCase = Depends(get_products_use_case),
) -> ProductResponse:
    product = await use_case.get(owner_id, product_id)
    return product_to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageProductsUseCase = Depends(get_products_use_case),
) -> ProductResponse:
    """Update product fields; omitted fields are left as they are."""
    product = await use_case.update(owner_id, product_id, request)
    return product_to_response(product)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: int,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageProductsUseCase = Depends(get_products_use_case),
) -> MessageResponse:
    """Soft-delete a product."""
    await use_case.deactivate(owner_id, product_id)
    return MessageResponse(message="Product deleted")
