"""Abstract interface for customer persistence."""

from abc import ABC, abstractmethod

from billbook.core.entities.customer import Customer


class ICustomerRepository(ABC):
    """Interface for customer persistence."""

    @abstractmethod
    async def get(self, customer_id: int, owner_id: int) -> Customer | None:
        """Get a customer by ID if it belongs to the owner."""
        pass

    @abstractmethod
    async def find_by_phone(self, phone: str, owner_id: int) -> Customer | None:
        """Find the owner's customer with this phone number."""
        pass

    @abstractmethod
    async def list_for_owner(self, owner_id: int) -> list[Customer]:
        """List the owner's customers, newest first."""
        pass

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """Create a new customer."""
        pass

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        """Update name and phone."""
        pass

    @abstractmethod
    async def delete(self, customer_id: int, owner_id: int) -> None:
        """Delete one of the owner's customers."""
        pass
