"""
Cache Infrastructure Exceptions

Domain-specific exceptions for cache operations.
The disabled cache never raises; these cover a live Redis store only.
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class CacheException(Exception):
    """Base exception for cache-related errors.

    Live cache operations raise this or its subclasses and keep the
    original Redis error as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class CacheConnectionException(CacheException):
    """Raised when a live cache is used after its connection was released."""

    def __init__(
        self,
        message: str = "Redis connection is closed",
        operation: Optional[str] = None,
    ):
        details = {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message, error_code="CACHE_CONNECTION_ERROR", details=details
        )


class CacheOperationException(CacheException):
    """Raised when a call against a live store fails."""

    def __init__(
        self,
        operation: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details: Dict[str, Any] = {"operation": operation}
        if key is not None:
            details["key"] = key
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(
            message=f"Cache operation '{operation}' failed",
            error_code="CACHE_OPERATION_ERROR",
            details=details,
        )
        if original_error:
            self.__cause__ = original_error


# HTTP Exceptions for API layer
class CacheHTTPException(HTTPException):
    """HTTP exception wrapper for cache errors."""

    def __init__(self, cache_exception: CacheException, status_code: int = 503):
        self.cache_exception = cache_exception
        super().__init__(
            status_code=status_code,
            detail={
                "error": cache_exception.error_code,
                "message": cache_exception.message,
                "details": cache_exception.details,
            },
        )
