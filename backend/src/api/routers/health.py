"""Root and health check endpoints."""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_app_context, get_async_session
from core.context import AppContext

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str
    cache: str


@router.get("/")
async def root() -> dict[str, str]:
    return {"message": "Hello World"}


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_session),
    context: AppContext = Depends(get_app_context),
) -> HealthResponse:
    """Check application, database and cache health."""
    db_status = "healthy"
    try:
        await db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database health check failed")
        db_status = "unhealthy"

    cache_status = "healthy" if await context.cache.ping() else "unhealthy"

    healthy = db_status == "healthy" and cache_status == "healthy"
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        database=db_status,
        cache=cache_status,
    )
