"""
Health check endpoints for the LMS cache service.

Reports service status and the state of the cache backend.
"""

from fastapi import APIRouter, Depends, Request
from typing import Dict, Any
import logging
from datetime import datetime, timezone

from ...core.config import Settings
from ...infrastructure.cache import (
    CacheBackend,
    CacheException,
    CacheHTTPException,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


def get_cache(request: Request) -> CacheBackend:
    """Return the cache owned by the application lifespan."""
    return request.app.state.cache


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


@router.get("/")
async def health_check(
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns a simple health status for load balancers and monitoring systems.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@router.get("/cache")
async def cache_health_check(
    cache: CacheBackend = Depends(get_cache),
) -> Dict[str, Any]:
    """
    Cache health check endpoint.

    A disabled cache is reported as such and is not an error. A live cache
    that cannot answer a ping yields 503.
    """
    if not cache.enabled:
        return {"status": "disabled", "enabled": False}

    try:
        await cache.ping()
    except CacheException as e:
        logger.error(f"Cache health check failed: {e.message}")
        raise CacheHTTPException(e)

    return {"status": "healthy", "enabled": True}
