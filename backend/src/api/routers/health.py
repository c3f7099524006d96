"""Health check endpoints."""
import logging

from fastapi import APIRouter
from pydantic import BaseModel

from core.redis import get_redis_client
from db.session import get_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    message: str
    database: str
    redis: str


async def _database_status() -> str:
    database = get_database()
    if database is None or not await database.ping():
        return "unhealthy"
    return "healthy"


async def _redis_status() -> str:
    redis_client = get_redis_client()
    if redis_client is None or not redis_client.is_connected:
        return "unavailable"
    return "healthy" if await redis_client.ping() else "unhealthy"


@router.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Report liveness plus the state of the database and the session store.

    Always answers 200; a degraded dependency is reported in the body. Sessions
    fall back to unavailable without Redis, so "unavailable" is not a failure.
    """
    database_status = await _database_status()
    redis_status = await _redis_status()
    if database_status != "healthy":
        logger.warning("Health check: database %s", database_status)
    return HealthResponse(
        message="All up and running !!",
        database=database_status,
        redis=redis_status,
    )
