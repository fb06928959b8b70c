"""Transaction boundary shared by all write paths."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from billbook.core.interfaces.customer_repository import ICustomerRepository
from billbook.core.interfaces.invoice_repository import IInvoiceRepository
from billbook.core.interfaces.product_repository import IProductRepository

T = TypeVar("T")


@dataclass
class UnitOfWork:
    """Repositories bound to one open transaction."""

    products: IProductRepository
    customers: ICustomerRepository
    invoices: IInvoiceRepository


class ITransactionScope(ABC):
    """
    All-or-nothing execution unit.

    run() commits every write made through the UnitOfWork when the work
    returns, and rolls all of them back when it raises.
    """

    @abstractmethod
    async def run(
        self,
        work: Callable[[UnitOfWork], Awaitable[T]],
        read_only: bool = False,
    ) -> T:
        """Execute work inside a single transaction."""
        pass
