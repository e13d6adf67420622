"""
Cache lifecycle helpers.

The cache implementation is chosen once, when the process starts, and the
underlying connection is released exactly once when it stops.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from redis.asyncio import Redis

from ...core.config import Settings
from .cache_service import CacheBackend, DisabledCache, RedisCache
from .connection_factory import build_redis_client, probe_connection

logger = logging.getLogger(__name__)


def create_cache(settings: Settings, client: Optional[Redis] = None) -> CacheBackend:
    """
    Select the cache implementation from configuration.

    Args:
        settings: Application settings
        client: Optional pre-built Redis client (tests, DI). Ignored when
            Redis is disabled.

    Returns:
        DisabledCache when REDIS_ENABLED is false, RedisCache otherwise
    """
    if not settings.REDIS_ENABLED:
        logger.warning(
            "Redis is disabled via configuration. All cache operations will be no-ops."
        )
        return DisabledCache(default_ttl=settings.REDIS_TTL)

    if client is None:
        client = build_redis_client(settings)
    return RedisCache(client, default_ttl=settings.REDIS_TTL)


async def open_cache(settings: Settings, client: Optional[Redis] = None) -> CacheBackend:
    """Create the cache and probe the store once; connect errors are only logged."""
    cache = create_cache(settings, client=client)
    if isinstance(cache, RedisCache):
        await probe_connection(cache.client, settings)
    return cache


@asynccontextmanager
async def cache_lifespan(
    settings: Settings, client: Optional[Redis] = None
) -> AsyncIterator[CacheBackend]:
    """Yield an opened cache and shut it down on exit."""
    cache = await open_cache(settings, client=client)
    try:
        yield cache
    finally:
        await cache.shutdown()
