"""
Health check router for liveness and readiness probes.
"""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorClient
from redis.asyncio import Redis

from authcore.database.connections import get_mongo_client, get_redis_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check with dependencies",
)
async def readiness_check(
    response: Response,
    mongo: Annotated[AsyncIOMotorClient, Depends(get_mongo_client)],
    redis: Annotated[Redis, Depends(get_redis_client)],
):
    """
    Readiness check that verifies the credential and session backends.
    Returns 200 if MongoDB and Redis are accessible, 503 otherwise.
    """
    checks = {
        "api": "healthy",
        "mongodb": "unknown",
        "redis": "unknown",
    }

    # Check MongoDB
    try:
        await mongo.admin.command("ping")
        checks["mongodb"] = "healthy"
    except Exception as e:
        logger.warning(f"MongoDB readiness check failed: {e}")
        checks["mongodb"] = "unhealthy"

    # Check Redis
    try:
        await redis.ping()
        checks["redis"] = "healthy"
    except Exception as e:
        logger.warning(f"Redis readiness check failed: {e}")
        checks["redis"] = "unhealthy"

    all_healthy = all(v == "healthy" for v in checks.values())
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }
