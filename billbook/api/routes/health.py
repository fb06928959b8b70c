"""
Health check endpoints.
"""

from fastapi import APIRouter

from billbook import __version__
from billbook.application.dto.responses import HealthResponse
from billbook.config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


async def _database_reachable() -> bool:
    from billbook.infrastructure.storage.sqlite import get_connection

    try:
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
    except Exception as e:
        logger.warning("health_database_unreachable", error=str(e))
        return False
    return True


@router.get("/health", response_model=HealthResponse)
@router.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Reports whether the database answers a trivial query.
    """
    database = await _database_reachable()
    return HealthResponse(
        status="healthy" if database else "degraded",
        version=__version__,
        database=database,
    )
