"""
Report figures derived from invoices and products.

Layer-pure: takes already-loaded, owner-scoped entities and returns plain
dataclasses. Nothing here reads the database.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime

from billbook.core.entities.invoice import Invoice, InvoiceStatus
from billbook.core.entities.product import Product


@dataclass
class SalesReport:
    invoices: list[Invoice]
    total: float


@dataclass
class MonthlyProfitLoss:
    month: str
    revenue: float = 0.0
    expense: float = 0.0


@dataclass
class ProfitLossReport:
    revenue: float
    cost: float
    profit: float
    monthly: list[MonthlyProfitLoss] = field(default_factory=list)


@dataclass
class MonthlyGst:
    month: str
    taxable: float = 0.0
    output: float = 0.0
    input: float = 0.0


@dataclass
class GstReport:
    taxable_sales: int
    output_gst: int
    input_gst: int
    net_gst: int
    monthly: list[MonthlyGst] = field(default_factory=list)


@dataclass
class DashboardSummary:
    total_sales: float
    received_amount: float
    pending_amount: float


@dataclass
class StockSummary:
    total_products: int
    active_products: int
    total_stock: int
    low_stock_count: int


@dataclass
class ProductSales:
    product_name: str
    quantity: int


def month_start(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _month_key(invoice: Invoice) -> str:
    return invoice.created_at.strftime("%Y-%m")


class ReportCalculator:
    """
    Computes sales, profit/loss, GST and dashboard figures.

    Cost of goods is not tracked per product, so profit/loss assumes each
    item costs cost_ratio of its amount. Invoice totals are treated as
    GST-inclusive at gst_rate.
    """

    def __init__(
        self,
        gst_rate: float = 0.18,
        cost_ratio: float = 0.70,
        low_stock_threshold: int = 20,
    ):
        self.gst_rate = gst_rate
        self.cost_ratio = cost_ratio
        self.low_stock_threshold = low_stock_threshold

    def sales(self, invoices: list[Invoice]) -> SalesReport:
        ordered = sorted(invoices, key=lambda inv: inv.created_at, reverse=True)
        return SalesReport(invoices=ordered, total=sum(inv.total for inv in ordered))

    def profit_loss(self, invoices: list[Invoice]) -> ProfitLossReport:
        """Revenue, assumed cost and profit with a per-month breakdown."""
        monthly: OrderedDict[str, MonthlyProfitLoss] = OrderedDict()
        revenue = 0.0
        cost = 0.0

        for inv in sorted(invoices, key=lambda i: i.created_at):
            expense = sum(item.amount * self.cost_ratio for item in inv.items)
            revenue += inv.total
            cost += expense

            key = _month_key(inv)
            bucket = monthly.setdefault(key, MonthlyProfitLoss(month=key))
            bucket.revenue += inv.total
            bucket.expense += expense

        return ProfitLossReport(
            revenue=round(revenue, 2),
            cost=round(cost, 2),
            profit=round(revenue - cost, 2),
            monthly=list(monthly.values()),
        )

    def gst(self, invoices: list[Invoice]) -> GstReport:
        """Output GST backed out of GST-inclusive totals."""
        monthly: OrderedDict[str, MonthlyGst] = OrderedDict()
        taxable_sales = 0.0
        output_gst = 0.0
        input_gst = 0.0  # purchases are not tracked

        for inv in sorted(invoices, key=lambda i: i.created_at):
            taxable = inv.total / (1 + self.gst_rate)
            tax = inv.total - taxable
            taxable_sales += taxable
            output_gst += tax

            key = _month_key(inv)
            bucket = monthly.setdefault(key, MonthlyGst(month=key))
            bucket.taxable += taxable
            bucket.output += tax

        return GstReport(
            taxable_sales=round(taxable_sales),
            output_gst=round(output_gst),
            input_gst=round(input_gst),
            net_gst=round(output_gst - input_gst),
            monthly=list(monthly.values()),
        )

    def dashboard(self, invoices: list[Invoice]) -> DashboardSummary:
        paid = sum(inv.total for inv in invoices if inv.status == InvoiceStatus.PAID)
        unpaid = sum(
            inv.total for inv in invoices if inv.status == InvoiceStatus.UNPAID
        )
        return DashboardSummary(
            total_sales=paid,
            received_amount=paid,
            pending_amount=unpaid,
        )

    def stock(self, products: list[Product]) -> StockSummary:
        return StockSummary(
            total_products=len(products),
            active_products=sum(1 for p in products if p.is_active),
            total_stock=sum(p.stock for p in products),
            low_stock_count=sum(
                1 for p in products if p.stock < self.low_stock_threshold
            ),
        )

    def top_products(
        self, invoices: list[Invoice], since: datetime, limit: int = 5
    ) -> list[ProductSales]:
        """
        Best sellers by units on PAID invoices created at or after since.

        Items are grouped by their name snapshot. Ties keep name order.
        """
        sold: dict[str, int] = {}
        for inv in invoices:
            if inv.status != InvoiceStatus.PAID or inv.created_at < since:
                continue
            for item in inv.items:
                name = item.product_name or "Unknown"
                sold[name] = sold.get(name, 0) + item.quantity

        ranked = sorted(sold.items(), key=lambda pair: (-pair[1], pair[0]))
        return [
            ProductSales(product_name=name, quantity=quantity)
            for name, quantity in ranked[:limit]
        ]
