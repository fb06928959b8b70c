"""Product catalog use cases: create, list, update, soft delete."""

import math

from billbook.application.dto.requests import CreateProductRequest, UpdateProductRequest
from billbook.config import get_logger
from billbook.core.entities.product import Product
from billbook.core.exceptions import (
    DuplicateProductError,
    ProductNotFoundError,
    ValidationError,
)
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork

logger = get_logger(__name__)


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Product name is required", field="name")
    return cleaned


def _check_rate(rate: float) -> float:
    if not math.isfinite(rate) or rate < 0:
        raise ValidationError("Product rate must be a non-negative number", field="rate", value=rate)
    return rate


def _check_stock(stock: int) -> int:
    if stock < 0:
        raise ValidationError("Stock cannot be negative", field="stock", value=stock)
    return stock


class ManageProductsUseCase:
    """
    Owner-scoped product catalog.

    Products are never hard-deleted because invoice items may reference
    them; deletion clears the active flag.
    """

    def __init__(self, transaction_scope: ITransactionScope | None = None):
        self._scope = transaction_scope

    def _get_scope(self) -> ITransactionScope:
        if self._scope is None:
            from billbook.infrastructure.storage.sqlite import get_transaction_scope

            self._scope = get_transaction_scope()
        return self._scope

    async def create(self, owner_id: int, request: CreateProductRequest) -> Product:
        product = Product(
            owner_id=owner_id,
            name=_clean_name(request.name),
            rate=_check_rate(request.rate),
            unit=request.unit.strip() if request.unit else None,
            stock=_check_stock(request.stock),
        )

        async def create_product(uow: UnitOfWork) -> Product:
            if await uow.products.find_by_name_and_owner(product.name, owner_id):
                raise DuplicateProductError(product.name)
            return await uow.products.create(product)

        return await self._get_scope().run(create_product)

    async def list_all(self, owner_id: int, include_inactive: bool = False) -> list[Product]:
        async def list_products(uow: UnitOfWork) -> list[Product]:
            return await uow.products.list_for_owner(owner_id, include_inactive)

        return await self._get_scope().run(list_products, read_only=True)

    async def get(self, owner_id: int, product_id: int) -> Product:
        async def get_product(uow: UnitOfWork) -> Product | None:
            return await uow.products.get(product_id, owner_id)

        product = await self._get_scope().run(get_product, read_only=True)
        if product is None or not product.is_active:
            raise ProductNotFoundError(product_id)
        return product

    async def update(
        self, owner_id: int, product_id: int, request: UpdateProductRequest
    ) -> Product:
        async def update_product(uow: UnitOfWork) -> Product:
            product = await uow.products.get(product_id, owner_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            if request.name is not None:
                name = _clean_name(request.name)
                if name != product.name:
                    if await uow.products.find_by_name_and_owner(name, owner_id):
                        raise DuplicateProductError(name)
                    product.name = name
            if request.rate is not None:
                product.rate = _check_rate(request.rate)
            if "unit" in request.model_fields_set:
                product.unit = request.unit.strip() if request.unit else None
            if request.stock is not None:
                product.stock = _check_stock(request.stock)
            if request.is_active is not None:
                product.is_active = request.is_active

            return await uow.products.update(product)

        return await self._get_scope().run(update_product)

    async def deactivate(self, owner_id: int, product_id: int) -> None:
        async def deactivate_product(uow: UnitOfWork) -> None:
            product = await uow.products.get(product_id, owner_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            product.is_active = False
            await uow.products.update(product)

        await self._get_scope().run(deactivate_product)
        logger.info("product_deactivated", owner_id=owner_id, product_id=product_id)

    async def low_stock(self, owner_id: int, threshold: int) -> list[Product]:
        async def list_low_stock(uow: UnitOfWork) -> list[Product]:
            return await uow.products.list_low_stock(owner_id, threshold)

        return await self._get_scope().run(list_low_stock, read_only=True)
