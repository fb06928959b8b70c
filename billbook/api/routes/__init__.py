"""API route modules."""

from billbook.api.routes.customers import router as customers_router
from billbook.api.routes.dashboard import router as dashboard_router
from billbook.api.routes.health import router as health_router
from billbook.api.routes.invoices import router as invoices_router
from billbook.api.routes.products import router as products_router
from billbook.api.routes.reports import router as reports_router

__all__ = [
    "health_router",
    "products_router",
    "customers_router",
    "invoices_router",
    "reports_router",
    "dashboard_router",
]
