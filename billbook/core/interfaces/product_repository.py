"""Abstract interface for product persistence."""

from abc import ABC, abstractmethod

from billbook.core.entities.product import Product


class IProductRepository(ABC):
    """Interface for product persistence, scoped to an enclosing transaction."""

    @abstractmethod
    async def find_by_name_and_owner(self, name: str, owner_id: int) -> Product | None:
        """Find a product by exact name among the owner's products."""
        pass

    @abstractmethod
    async def get(self, product_id: int, owner_id: int) -> Product | None:
        """Get a product by ID if it belongs to the owner."""
        pass

    @abstractmethod
    async def list_for_owner(
        self, owner_id: int, include_inactive: bool = False
    ) -> list[Product]:
        """List the owner's products, newest first."""
        pass

    @abstractmethod
    async def list_low_stock(self, owner_id: int, threshold: int) -> list[Product]:
        """List active products whose stock is below the threshold."""
        pass

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Create a new product."""
        pass

    @abstractmethod
    async def update(self, product: Product) -> Product:
        """Update name, rate, unit, stock and active flag."""
        pass

    @abstractmethod
    async def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        Decrement stock by quantity only if enough remains.

        Returns False, leaving the row untouched, when the decrement would
        make stock negative.
        """
        pass
