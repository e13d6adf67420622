"""
LMS Cache - Main FastAPI Application

The application lifespan owns the cache: it is opened once at startup
(connection errors are logged, not fatal) and shut down once at exit.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .infrastructure.cache import cache_lifespan
from .api.endpoints.health import router as health_router

logger = structlog.get_logger()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application around one cache instance."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
        logger.info(
            "Starting LMS cache service",
            version=settings.SERVICE_VERSION,
            environment=settings.ENVIRONMENT,
            redis_enabled=settings.REDIS_ENABLED,
        )

        async with cache_lifespan(settings) as cache:
            app.state.cache = cache
            yield
            logger.info("Shutting down LMS cache service")

        logger.info("LMS cache service stopped")

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.include_router(health_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
