"""
Unit tests for cache selection and lifecycle.
"""

import logging

import pytest
from unittest.mock import patch
from redis.exceptions import ConnectionError as RedisConnectionError

from lms_cache.infrastructure.cache import (
    DisabledCache,
    RedisCache,
    cache_lifespan,
    create_cache,
    open_cache,
)

LIFECYCLE = "lms_cache.infrastructure.cache.lifecycle"
FACTORY_LOGGER = "lms_cache.infrastructure.cache.connection_factory"


class TestCreateCache:
    """Test implementation selection."""

    def test_disabled_never_builds_client(self, disabled_settings, caplog):
        with patch(f"{LIFECYCLE}.build_redis_client") as mock_build:
            with caplog.at_level(logging.WARNING, logger=LIFECYCLE):
                cache = create_cache(disabled_settings)

        assert isinstance(cache, DisabledCache)
        assert cache.default_ttl == 3600
        mock_build.assert_not_called()
        assert "disabled via configuration" in caplog.text

    def test_disabled_ignores_injected_client(self, disabled_settings, redis_client):
        cache = create_cache(disabled_settings, client=redis_client)

        assert isinstance(cache, DisabledCache)
        redis_client.assert_not_called()

    def test_enabled_builds_client_from_settings(self, enabled_settings, redis_client):
        with patch(
            f"{LIFECYCLE}.build_redis_client", return_value=redis_client
        ) as mock_build:
            cache = create_cache(enabled_settings)

        mock_build.assert_called_once_with(enabled_settings)
        assert isinstance(cache, RedisCache)
        assert cache.client is redis_client
        assert cache.default_ttl == 600

    def test_enabled_uses_injected_client(self, enabled_settings, redis_client):
        with patch(f"{LIFECYCLE}.build_redis_client") as mock_build:
            cache = create_cache(enabled_settings, client=redis_client)

        mock_build.assert_not_called()
        assert cache.client is redis_client


class TestOpenCache:
    """Test startup probing."""

    @pytest.mark.asyncio
    async def test_connect_success_is_logged(
        self, enabled_settings, redis_client, caplog
    ):
        with caplog.at_level(logging.INFO, logger=FACTORY_LOGGER):
            cache = await open_cache(enabled_settings, client=redis_client)

        redis_client.ping.assert_awaited_once()
        assert isinstance(cache, RedisCache)
        assert "Redis connected successfully" in caplog.text

    @pytest.mark.asyncio
    async def test_connect_error_is_logged_not_raised(
        self, enabled_settings, redis_client, caplog
    ):
        redis_client.ping.side_effect = RedisConnectionError("Connection refused")

        with caplog.at_level(logging.ERROR, logger=FACTORY_LOGGER):
            cache = await open_cache(enabled_settings, client=redis_client)

        # The broken handle is kept; failures surface at the point of use
        assert isinstance(cache, RedisCache)
        assert cache.enabled is True
        assert "Redis connection error" in caplog.text

    @pytest.mark.asyncio
    async def test_disabled_does_not_probe(self, disabled_settings, redis_client):
        cache = await open_cache(disabled_settings, client=redis_client)

        assert isinstance(cache, DisabledCache)
        redis_client.ping.assert_not_called()


class TestCacheLifespan:
    """Test scoped acquisition and release."""

    @pytest.mark.asyncio
    async def test_releases_client_on_exit(self, enabled_settings, redis_client):
        async with cache_lifespan(enabled_settings, client=redis_client) as cache:
            await cache.set("session:1", "payload", 60)

        redis_client.aclose.assert_awaited_once()
        assert cache.closed is True

    @pytest.mark.asyncio
    async def test_releases_client_on_error(self, enabled_settings, redis_client):
        with pytest.raises(RuntimeError):
            async with cache_lifespan(enabled_settings, client=redis_client):
                raise RuntimeError("request handler failed")

        redis_client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disabled_lifespan(self, disabled_settings):
        async with cache_lifespan(disabled_settings) as cache:
            assert cache.enabled is False
            assert await cache.get("session:1") is None
