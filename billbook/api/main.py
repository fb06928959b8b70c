"""
FastAPI application factory.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from billbook import __version__
from billbook.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from billbook.api.middleware.error_handler import setup_exception_handlers
from billbook.api.routes import (
    customers_router,
    dashboard_router,
    health_router,
    invoices_router,
    products_router,
    reports_router,
)
from billbook.config import Settings, configure_logging, get_logger, get_settings
from billbook.core.exceptions import ConfigurationError

logger = get_logger(__name__)

ROUTERS = (
    health_router,
    products_router,
    customers_router,
    invoices_router,
    reports_router,
    dashboard_router,
)


async def prepare_database(settings: Settings) -> None:
    """Migrate the configured database and open the shared pool."""
    from billbook.infrastructure.storage.sqlite import get_connection_pool
    from billbook.infrastructure.storage.sqlite.migrations import run_migrations

    results = await run_migrations(settings.storage.db_path)
    failed = [r for r in results if not r.success]
    if failed:
        raise ConfigurationError(
            f"Migration v{failed[0].version} failed: {failed[0].error}",
            details={"db_path": str(settings.storage.db_path)},
        )

    await get_connection_pool()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info(
        "application_starting",
        version=__version__,
        db_path=str(settings.storage.db_path),
        debug=settings.api.debug,
    )

    try:
        await prepare_database(settings)
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")
    yield

    from billbook.infrastructure.storage.sqlite import close_connection_pool

    await close_connection_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Build the API with middleware, error handlers and routers."""
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Billbook API",
        description="Invoicing with atomic stock accounting",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Starlette runs the last added middleware first
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
            expose_headers=["X-Request-ID", "X-Response-Time"],
        )

    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "billbook.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
