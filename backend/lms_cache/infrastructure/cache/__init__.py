"""
Cache Infrastructure Module

Feature-gated Redis cache with a no-op variant for disabled deployments.

This module provides:
- CacheBackend: capability interface used by call sites
- DisabledCache / RedisCache: the two implementations
- create_cache / open_cache / cache_lifespan: selection and lifecycle
- Exception hierarchy for live store failures
"""

from .cache_service import (
    CacheBackend,
    DisabledCache,
    RedisCache,
    TTL_KEY_MISSING,
    TTL_NO_EXPIRY,
)
from .connection_factory import build_redis_client, probe_connection
from .lifecycle import create_cache, open_cache, cache_lifespan
from .exceptions import (
    CacheException,
    CacheConnectionException,
    CacheOperationException,
    CacheHTTPException,
)

__all__ = [
    # Facade
    "CacheBackend",
    "DisabledCache",
    "RedisCache",
    "TTL_KEY_MISSING",
    "TTL_NO_EXPIRY",
    # Connection management
    "build_redis_client",
    "probe_connection",
    # Lifecycle
    "create_cache",
    "open_cache",
    "cache_lifespan",
    # Exceptions
    "CacheException",
    "CacheConnectionException",
    "CacheOperationException",
    "CacheHTTPException",
]
