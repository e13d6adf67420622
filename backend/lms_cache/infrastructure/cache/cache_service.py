"""
Cache Service - Feature-gated Redis facade

Two implementations share one capability interface:

- ``DisabledCache``: selected when Redis is switched off. Never touches
  the network and behaves as a permanently empty store.
- ``RedisCache``: forwards every call to an injected ``redis.asyncio``
  client. Store errors propagate as ``CacheOperationException``; the
  facade itself never retries.
"""

import logging
from typing import Awaitable, Callable, Optional, Protocol, TypeVar, runtime_checkable

from redis.asyncio import Redis
from redis.exceptions import RedisError

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from .exceptions import CacheConnectionException, CacheOperationException

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

T = TypeVar("T")

# Redis TTL sentinels
TTL_KEY_MISSING = -2
TTL_NO_EXPIRY = -1


@runtime_checkable
class CacheBackend(Protocol):
    """Capability interface shared by the disabled and live caches."""

    @property
    def enabled(self) -> bool:
        """True when calls reach a real store."""
        ...

    @property
    def default_ttl(self) -> int:
        """Suggested expiry in seconds. Callers pass it explicitly."""
        ...

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        ...

    async def get(self, key: str) -> Optional[str]:
        ...

    async def delete(self, key: str) -> None:
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def expire(self, key: str, ttl_seconds: int) -> None:
        ...

    async def ttl(self, key: str) -> int:
        ...

    async def flush(self) -> None:
        ...

    async def ping(self) -> bool:
        ...

    async def shutdown(self) -> None:
        ...


class DisabledCache:
    """No-op cache used when Redis is disabled via configuration."""

    def __init__(self, default_ttl: int = 3600):
        self._default_ttl = default_ttl

    @property
    def enabled(self) -> bool:
        return False

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        return None

    async def get(self, key: str) -> Optional[str]:
        return None

    async def delete(self, key: str) -> None:
        return None

    async def exists(self, key: str) -> bool:
        return False

    async def expire(self, key: str, ttl_seconds: int) -> None:
        return None

    async def ttl(self, key: str) -> int:
        return TTL_KEY_MISSING

    async def flush(self) -> None:
        return None

    async def ping(self) -> bool:
        return False

    async def shutdown(self) -> None:
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()


class RedisCache:
    """
    Live cache backed by a single shared Redis client.

    The client is owned by this object from construction until
    ``shutdown()``; it is safe to share between any number of coroutines.
    """

    def __init__(self, client: Redis, default_ttl: int = 3600):
        self._client = client
        self._default_ttl = default_ttl
        self._closed = False

    @property
    def enabled(self) -> bool:
        return True

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    @property
    def client(self) -> Redis:
        return self._client

    @property
    def closed(self) -> bool:
        return self._closed

    async def _execute(
        self,
        operation: str,
        key: Optional[str],
        call: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Run one store round trip inside a tracing span.

        Raises:
            CacheConnectionException: If the cache was already shut down
            CacheOperationException: If the store call fails
        """
        if self._closed:
            raise CacheConnectionException(
                message=f"Cache is shut down; cannot run '{operation}'",
                operation=operation,
            )

        with tracer.start_as_current_span(f"cache.{operation}") as span:
            span.set_attribute("db.system", "redis")
            span.set_attribute("cache.operation", operation)
            if key is not None:
                span.set_attribute("cache.key", key)

            try:
                result = await call()
            except RedisError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.warning(
                    f"Cache operation failed: {operation}",
                    extra={"operation": operation, "key": key, "error": str(e)},
                )
                raise CacheOperationException(
                    operation, key=key, original_error=e
                ) from e

            span.set_status(Status(StatusCode.OK))
            return result

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        """Store value under key; a falsy ttl_seconds means no expiry."""
        if ttl_seconds:
            await self._execute(
                "set", key, lambda: self._client.setex(key, ttl_seconds, value)
            )
        else:
            await self._execute("set", key, lambda: self._client.set(key, value))

    async def get(self, key: str) -> Optional[str]:
        return await self._execute("get", key, lambda: self._client.get(key))

    async def delete(self, key: str) -> None:
        await self._execute("delete", key, lambda: self._client.delete(key))

    async def exists(self, key: str) -> bool:
        result = await self._execute("exists", key, lambda: self._client.exists(key))
        return result == 1

    async def expire(self, key: str, ttl_seconds: int) -> None:
        """Set expiry on an existing key. Absent keys are left absent."""
        await self._execute(
            "expire", key, lambda: self._client.expire(key, ttl_seconds)
        )

    async def ttl(self, key: str) -> int:
        """Seconds remaining; -1 without expiry, -2 when the key is absent."""
        result = await self._execute("ttl", key, lambda: self._client.ttl(key))
        return int(result)

    async def flush(self) -> None:
        """Remove every key in the selected logical database."""
        await self._execute("flush", None, self._client.flushdb)
        logger.warning("Cache flushed: all keys in the logical database deleted")

    async def ping(self) -> bool:
        return bool(await self._execute("ping", None, self._client.ping))

    async def shutdown(self) -> None:
        """Close the client. Later calls are no-ops."""
        if self._closed:
            return
        try:
            await self._execute("shutdown", None, self._client.aclose)
        finally:
            self._closed = True
        logger.info("Redis cache connection closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()
