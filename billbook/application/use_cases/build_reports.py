"""Report and dashboard use cases (informational, owner-scoped reads)."""

from datetime import datetime

from billbook.config import get_settings
from billbook.core.entities.invoice import Invoice
from billbook.core.entities.product import Product
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork
from billbook.core.services.report_calculator import (
    DashboardSummary,
    GstReport,
    ProductSales,
    ProfitLossReport,
    ReportCalculator,
    SalesReport,
    StockSummary,
    month_start,
)


class BuildReportsUseCase:
    """
    Sales, profit/loss, GST and dashboard figures for one owner.

    Reads run in deferred transactions and may see the state just before an
    in-flight invoice creation commits.
    """

    def __init__(
        self,
        transaction_scope: ITransactionScope | None = None,
        calculator: ReportCalculator | None = None,
    ):
        self._scope = transaction_scope
        self._calculator = calculator

    def _get_scope(self) -> ITransactionScope:
        if self._scope is None:
            from billbook.infrastructure.storage.sqlite import get_transaction_scope

            self._scope = get_transaction_scope()
        return self._scope

    @property
    def calculator(self) -> ReportCalculator:
        if self._calculator is None:
            report = get_settings().report
            self._calculator = ReportCalculator(
                gst_rate=report.gst_rate,
                cost_ratio=report.cost_ratio,
                low_stock_threshold=report.low_stock_threshold,
            )
        return self._calculator

    async def _invoices(self, owner_id: int, with_items: bool = False) -> list[Invoice]:
        async def load_invoices(uow: UnitOfWork) -> list[Invoice]:
            return await uow.invoices.list_for_owner(owner_id, with_items=with_items)

        return await self._get_scope().run(load_invoices, read_only=True)

    async def _products(self, owner_id: int) -> list[Product]:
        async def load_products(uow: UnitOfWork) -> list[Product]:
            return await uow.products.list_for_owner(owner_id, include_inactive=True)

        return await self._get_scope().run(load_products, read_only=True)

    async def sales(self, owner_id: int) -> SalesReport:
        return self.calculator.sales(await self._invoices(owner_id))

    async def profit_loss(self, owner_id: int) -> ProfitLossReport:
        return self.calculator.profit_loss(await self._invoices(owner_id, with_items=True))

    async def gst(self, owner_id: int) -> GstReport:
        return self.calculator.gst(await self._invoices(owner_id))

    async def dashboard(self, owner_id: int) -> DashboardSummary:
        return self.calculator.dashboard(await self._invoices(owner_id))

    async def stock(self, owner_id: int) -> StockSummary:
        return self.calculator.stock(await self._products(owner_id))

    async def top_products(
        self, owner_id: int, now: datetime | None = None, limit: int = 5
    ) -> list[ProductSales]:
        """Units sold per product on this month's PAID invoices."""
        since = month_start(now or datetime.utcnow())
        invoices = await self._invoices(owner_id, with_items=True)
        return self.calculator.top_products(invoices, since=since, limit=limit)
