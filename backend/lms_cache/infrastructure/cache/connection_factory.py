"""
Redis Connection Factory

Builds the single Redis handle shared by the whole process and reports
connection events to the log. Connection errors at startup are never fatal.
"""

import logging

from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    TimeoutError as RedisTimeoutError,
    RedisError,
)

from ...core.config import Settings

logger = logging.getLogger(__name__)


def build_redis_client(settings: Settings) -> Redis:
    """
    Create the Redis client described by settings.

    redis-py connects lazily, so no socket is opened here. Each request is
    attempted at most ``REDIS_MAX_ATTEMPTS`` times by the client itself.
    """
    retry = Retry(ExponentialBackoff(), settings.REDIS_MAX_ATTEMPTS - 1)

    return Redis(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        password=settings.redis_password,
        db=settings.REDIS_DB,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=settings.REDIS_CONNECT_TIMEOUT,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        retry=retry,
        retry_on_error=[RedisConnectionError, RedisTimeoutError],
    )


async def probe_connection(client: Redis, settings: Settings) -> bool:
    """
    Ping the store once and log the outcome.

    Returns:
        True if the store answered, False otherwise. Never raises.
    """
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        logger.error(
            f"Redis connection error: {e}",
            extra={
                "host": settings.REDIS_HOST,
                "port": settings.REDIS_PORT,
                "db": settings.REDIS_DB,
            },
        )
        return False

    logger.info(
        "Redis connected successfully",
        extra={
            "host": settings.REDIS_HOST,
            "port": settings.REDIS_PORT,
            "db": settings.REDIS_DB,
        },
    )
    return True
