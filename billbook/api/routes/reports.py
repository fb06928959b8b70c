"""Report endpoints (owner-scoped, informational)."""

from fastapi import APIRouter, Depends

from billbook.api.auth import get_current_owner_id
from billbook.api.dependencies import get_reports_use_case
from billbook.application.dto.mappers import invoice_to_response
from billbook.application.dto.responses import (
    GstReportResponse,
    MonthlyGstResponse,
    MonthlyProfitLossResponse,
    ProfitLossResponse,
    SalesReportResponse,
)
from billbook.application.use_cases.build_reports import BuildReportsUseCase

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/sales", response_model=SalesReportResponse)
async def sales_report(
    owner_id: int = Depends(get_current_owner_id),
    use_case: BuildReportsUseCase = Depends(get_reports_use_case),
) -> SalesReportResponse:
    """All invoices with the grand total."""
    report = await use_case.sales(owner_id)
    return SalesReportResponse(
        invoices=[invoice_to_response(inv) for inv in report.invoices],
        total=report.total,
    )


@router.get("/profit-loss", response_model=ProfitLossResponse)
async def profit_loss_report(
    owner_id: int = Depends(get_current_owner_id),
    use_case: BuildReportsUseCase = Depends(get_reports_use_case),
) -> ProfitLossResponse:
    """Revenue against an estimated cost, overall and per month."""
    report = await use_case.profit_loss(owner_id)
    return ProfitLossResponse(
        revenue=report.revenue,
        cost=report.cost,
        profit=report.profit,
        monthly=[
            MonthlyProfitLossResponse(month=m.month, revenue=m.revenue, expense=m.expense)
            for m in report.monthly
        ],
    )


@router.get("/gst", response_model=GstReportResponse)
async def gst_report(
    owner_id: int = Depends(get_current_owner_id),
    use_case: BuildReportsUseCase = Depends(get_reports_use_case),
) -> GstReportResponse:
    """Output GST on sales at the configured flat rate."""
    report = await use_case.gst(owner_id)
    return GstReportResponse(
        taxable_sales=report.taxable_sales,
        output_gst=report.output_gst,
        input_gst=report.input_gst,
        net_gst=report.net_gst,
        monthly=[
            MonthlyGstResponse(
                month=m.month, taxable=m.taxable, output=m.output, input=m.input
            )
            for m in report.monthly
        ],
    )
