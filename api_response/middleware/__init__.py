"""Middleware package — the global fault boundary."""

from api_response.middleware.error_handler import (
    ApiResponseExceptionMiddleware,
    FaultMapping,
    build_fault_response,
    resolve_fault,
    use_exception_handler,
)

__all__ = [
    "ApiResponseExceptionMiddleware",
    "FaultMapping",
    "build_fault_response",
    "resolve_fault",
    "use_exception_handler",
]
