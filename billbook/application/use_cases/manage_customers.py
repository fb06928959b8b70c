"""Customer use cases."""

from billbook.application.dto.requests import CreateCustomerRequest, UpdateCustomerRequest
from billbook.config import get_logger
from billbook.core.entities.customer import Customer
from billbook.core.exceptions import (
    CustomerNotFoundError,
    DuplicateCustomerError,
    ValidationError,
)
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork

logger = get_logger(__name__)


class ManageCustomersUseCase:
    """Owner-scoped customer records."""

    def __init__(self, transaction_scope: ITransactionScope | None = None):
        self._scope = transaction_scope

    def _get_scope(self) -> ITransactionScope:
        if self._scope is None:
            from billbook.infrastructure.storage.sqlite import get_transaction_scope

            self._scope = get_transaction_scope()
        return self._scope

    async def create(self, owner_id: int, request: CreateCustomerRequest) -> Customer:
        name = request.name.strip()
        phone = request.phone.strip()
        if not name or not phone:
            raise ValidationError("Name and phone required", field="name")

        async def create_customer(uow: UnitOfWork) -> Customer:
            if await uow.customers.find_by_phone(phone, owner_id):
                raise DuplicateCustomerError(phone)
            return await uow.customers.create(
                Customer(owner_id=owner_id, name=name, phone=phone)
            )

        return await self._get_scope().run(create_customer)

    async def list_all(self, owner_id: int) -> list[Customer]:
        async def list_customers(uow: UnitOfWork) -> list[Customer]:
            return await uow.customers.list_for_owner(owner_id)

        return await self._get_scope().run(list_customers, read_only=True)

    async def get(self, owner_id: int, customer_id: int) -> Customer:
        async def get_customer(uow: UnitOfWork) -> Customer | None:
            return await uow.customers.get(customer_id, owner_id)

        customer = await self._get_scope().run(get_customer, read_only=True)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    async def update(
        self, owner_id: int, customer_id: int, request: UpdateCustomerRequest
    ) -> Customer:
        async def update_customer(uow: UnitOfWork) -> Customer:
            customer = await uow.customers.get(customer_id, owner_id)
            if customer is None:
                raise CustomerNotFoundError(customer_id)

            if request.name is not None:
                if not request.name.strip():
                    raise ValidationError("Customer name cannot be empty", field="name")
                customer.name = request.name.strip()
            if request.phone is not None:
                phone = request.phone.strip()
                if not phone:
                    raise ValidationError("Customer phone cannot be empty", field="phone")
                if phone != customer.phone:
                    if await uow.customers.find_by_phone(phone, owner_id):
                        raise DuplicateCustomerError(phone)
                    customer.phone = phone

            return await uow.customers.update(customer)

        return await self._get_scope().run(update_customer)

    async def delete(self, owner_id: int, customer_id: int) -> int:
        """Delete a customer and all of their invoices. Returns invoices removed."""

        async def delete_customer(uow: UnitOfWork) -> int:
            customer = await uow.customers.get(customer_id, owner_id)
            if customer is None:
                raise CustomerNotFoundError(customer_id)
            removed = await uow.invoices.delete_for_customer(customer_id, owner_id)
            await uow.customers.delete(customer_id, owner_id)
            return removed

        removed = await self._get_scope().run(delete_customer)
        logger.info(
            "customer_removed",
            owner_id=owner_id,
            customer_id=customer_id,
            invoices_removed=removed,
        )
        return removed
