"""Health check endpoint."""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.routers.feed import LIMITERS
from db.session import get_async_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Service status, store reachability, and feed limiter memory use."""

    status: str
    database: str
    rate_limited_clients: int  # Identifiers currently held by the feed limiters


async def _database_status(db: AsyncSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("health_database_unreachable")
        return "unhealthy"
    return "healthy"


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Report whether the bookmark store answers and how many clients are tracked."""
    database = await _database_status(db)
    return HealthResponse(
        status="ok" if database == "healthy" else "degraded",
        database=database,
        rate_limited_clients=sum(len(limiter) for limiter in LIMITERS),
    )
