"""Dashboard endpoints."""

from fastapi import APIRouter, Depends

from billbook.api.auth import get_current_owner_id
from billbook.api.dependencies import (
    get_app_settings,
    get_products_use_case,
    get_reports_use_case,
)
from billbook.application.dto.mappers import product_to_response
from billbook.application.dto.responses import (
    DashboardSummaryResponse,
    ProductListResponse,
    StockSummaryResponse,
    TopProductResponse,
    TopProductsResponse,
)
from billbook.application.use_cases.build_reports import BuildReportsUseCase
from billbook.application.use_cases.manage_products import ManageProductsUseCase
from billbook.config import Settings

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummaryResponse)
async def dashboard_summary(
    owner_id: int = Depends(get_current_owner_id),
    use_case: BuildReportsUseCase = Depends(get_reports_use_case),
) -> DashboardSummaryResponse:
    """Total sales split into received and pending amounts."""
    summary = await use_case.dashboard(owner_id)
    return DashboardSummaryResponse(
        total_sales=summary.total_sales,
        received_amount=summary.received_amount,
        pending_amount=summary.pending_amount,
    )


@router.get("/stock-summary", response_model=StockSummaryResponse)
async def stock_summary(
    owner_id: int = Depends(get_current_owner_id),
    use_case: BuildReportsUseCase = Depends(get_reports_use_case),
) -> StockSummaryResponse:
    summary = await use_case.stock(owner_id)
    return StockSummaryResponse(
        total_products=summary.total_products,
        active_products=summary.active_products,
        total_stock=summary.total_stock,
        low_stock_count=summary.low_stock_count,
    )


@router.get("/low-stock", response_model=ProductListResponse)
async def low_stock(
    threshold: int | None = None,
    owner_id: int = Depends(get_current_owner_id),
    use_case: ManageProductsUseCase = Depends(get_products_use_case),
    settings: Settings = Depends(get_app_settings),
) -> ProductListResponse:
    """Active products whose stock is below the threshold."""
    if threshold is None:
        threshold = settings.report.low_stock_threshold
    products = await use_case.low_stock(owner_id, threshold)
    return ProductListResponse(
        products=[product_to_response(p) for p in products],
        total=len(products),
    )


@router.get("/top-products", response_model=TopProductsResponse)
async def top_products(
    owner_id: int = Depends(get_current_owner_id),
    use_case: BuildReportsUseCase = Depends(get_reports_use_case),
) -> TopProductsResponse:
    """Five best-selling products by units on this month's PAID invoices."""
    ranked = await use_case.top_products(owner_id)
    return TopProductsResponse(
        products=[
            TopProductResponse(product_name=p.product_name, quantity=p.quantity)
            for p in ranked
        ]
    )
