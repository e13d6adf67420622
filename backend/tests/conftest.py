"""
Main pytest configuration for all backend tests.

Fixtures and configuration shared by unit and integration tests.
"""

import os
import pytest
from unittest.mock import AsyncMock

# Set test environment variables before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["REDIS_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_JSON"] = "false"

from lms_cache.core.config import Settings


@pytest.fixture
def disabled_settings():
    """Settings with the cache switched off."""
    return Settings(ENVIRONMENT="test", REDIS_ENABLED=False, REDIS_TTL=3600)


@pytest.fixture
def enabled_settings():
    """Settings with the cache switched on (no server is contacted)."""
    return Settings(
        ENVIRONMENT="test",
        REDIS_ENABLED=True,
        REDIS_HOST="cache.internal",
        REDIS_PORT=6380,
        REDIS_PASSWORD="s3cret",
        REDIS_DB=2,
        REDIS_TTL=600,
    )


@pytest.fixture
def redis_client():
    """Stand-in for redis.asyncio.Redis; every command is awaitable."""
    client = AsyncMock()
    client.get.return_value = None
    client.exists.return_value = 0
    client.ttl.return_value = -2
    client.ping.return_value = True
    return client
