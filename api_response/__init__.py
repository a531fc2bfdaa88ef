"""Consistent JSON response envelopes for FastAPI applications."""

from api_response.config.settings import ApiResponseSettings
from api_response.integration import setup_api_response
from api_response.logging_config import JsonFormatter, configure_logging
from api_response.middleware.error_handler import (
    ApiResponseExceptionMiddleware,
    FaultMapping,
    use_exception_handler,
)
from api_response.models import ApiError, ApiResponse, PagedMeta, PagedResponse
from api_response.problem_details import (
    ProblemDetails,
    from_problem_details,
    register_problem_handlers,
)
from api_response.results import resolve_status_code, to_response, wrap_result
from api_response.routing import AutoWrapRoute, auto_wrap, envelope_response_model, use_auto_wrap

__all__ = [
    "ApiError",
    "ApiResponse",
    "ApiResponseExceptionMiddleware",
    "ApiResponseSettings",
    "AutoWrapRoute",
    "FaultMapping",
    "JsonFormatter",
    "PagedMeta",
    "PagedResponse",
    "ProblemDetails",
    "auto_wrap",
    "configure_logging",
    "from_problem_details",
    "register_problem_handlers",
    "resolve_status_code",
    "setup_api_response",
    "to_response",
    "envelope_response_model",
    "use_auto_wrap",
    "use_exception_handler",
    "wrap_result",
]
