"""
LMS Cache Configuration

Configuration management with environment variable support.
Implements secure defaults and validation for all settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr, field_validator
from typing import Optional
from functools import lru_cache
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation and secure defaults."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # Environment settings
    ENVIRONMENT: str = Field(
        default="development", description="Application environment"
    )
    SERVICE_NAME: str = Field(
        default="lms-cache", description="Service name used in logs and health"
    )
    SERVICE_VERSION: str = Field(default="0.1.0", description="Service version")

    # Redis configuration
    REDIS_ENABLED: bool = Field(
        default=False, description="Master switch; disabled means every call is a no-op"
    )
    REDIS_HOST: str = Field(default="localhost", description="Redis host")
    REDIS_PORT: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    REDIS_PASSWORD: Optional[SecretStr] = Field(
        default=None, description="Redis password (optional)"
    )
    REDIS_DB: int = Field(default=0, ge=0, description="Logical database index")
    REDIS_TTL: int = Field(
        default=3600,
        ge=1,
        description="Default expiry suggestion in seconds; never applied implicitly",
    )
    REDIS_MAX_ATTEMPTS: int = Field(
        default=3, ge=1, le=10, description="Attempts per request made by the client"
    )
    REDIS_CONNECT_TIMEOUT: float = Field(
        default=5.0, gt=0, description="Socket connect timeout in seconds"
    )
    REDIS_SOCKET_TIMEOUT: Optional[float] = Field(
        default=None, gt=0, description="Socket read timeout in seconds"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_JSON: bool = Field(default=True, description="Render logs as JSON")

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @field_validator("REDIS_PASSWORD", mode="before")
    @classmethod
    def empty_password_is_none(cls, v):
        """Treat an empty password as no password."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def redis_password(self) -> Optional[str]:
        """Plain-text Redis password, or None."""
        if self.REDIS_PASSWORD is None:
            return None
        return self.REDIS_PASSWORD.get_secret_value()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
