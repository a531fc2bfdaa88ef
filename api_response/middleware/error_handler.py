"""Global fault boundary.

``ApiResponseExceptionMiddleware`` wraps the rest of the pipeline in a single
try/except. Any exception that escapes a handler is logged and turned into a
failed envelope:

    { "success": false, "message": "Internal server error", "data": null,
      "errors": [{ "code": "INTERNAL_ERROR", "message": "<exception message>",
                   "field": null, "meta": null }],
      "meta": null, "code": 500 }

All faults are flattened to 500 / INTERNAL_ERROR. Finer-grained handling is
opt-in through a ``fault_map`` from exception type to ``FaultMapping``.
Whether the raw exception message reaches the client is controlled by
``ApiResponseSettings.expose_exception_details``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from api_response.config.settings import ApiResponseSettings
from api_response.models.errors import ApiError
from api_response.models.responses import ApiResponse

logger = logging.getLogger(__name__)

HTTP_500 = 500


@dataclass(frozen=True)
class FaultMapping:
    """Status, error code and optional envelope message for one fault category."""

    status_code: int
    code: str
    message: str | None = None


FaultMap = Mapping[type[BaseException], FaultMapping]


def resolve_fault(exc: BaseException, fault_map: FaultMap | None) -> FaultMapping | None:
    """Most specific mapping for ``exc``, following its class hierarchy."""
    if not fault_map:
        return None
    for cls in type(exc).__mro__:
        mapping = fault_map.get(cls)
        if mapping is not None:
            return mapping
    return None


def build_fault_response(
    exc: BaseException,
    settings: ApiResponseSettings,
    fault_map: FaultMap | None = None,
) -> ApiResponse[None]:
    """Failed envelope describing an unhandled exception."""
    if settings.expose_exception_details:
        error_message = str(exc) or type(exc).__name__
    else:
        error_message = settings.redacted_error_message

    mapping = resolve_fault(exc, fault_map)
    if mapping is None:
        return ApiResponse.fail(
            ApiError(message=error_message, code=settings.internal_error_code),
            message=settings.internal_error_message,
            code=HTTP_500,
        )

    envelope_message = mapping.message
    if envelope_message is None:
        try:
            envelope_message = HTTPStatus(mapping.status_code).phrase
        except ValueError:
            envelope_message = settings.internal_error_message
    return ApiResponse.fail(
        ApiError(message=error_message, code=mapping.code),
        message=envelope_message,
        code=mapping.status_code,
    )


class ApiResponseExceptionMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that converts unhandled exceptions into envelopes.

    The exception is considered handled: it is logged with its traceback and
    not re-raised. Install it last so it is the outermost user middleware.
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: ApiResponseSettings | None = None,
        fault_map: FaultMap | None = None,
    ) -> None:
        super().__init__(app)
        self._settings = settings or ApiResponseSettings()
        self._fault_map = dict(fault_map) if fault_map else {}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        envelope = build_fault_response(exc, self._settings, self._fault_map)
        status_code = envelope.code or HTTP_500
        error_code = envelope.errors[0].code if envelope.errors else None

        logger.error(
            "Unhandled exception: %s",
            exc,
            exc_info=exc,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "error_code": error_code,
            },
        )
        return JSONResponse(
            status_code=status_code,
            content=envelope.to_wire(),
            media_type="application/json",
        )


def use_exception_handler(
    app: FastAPI,
    settings: ApiResponseSettings | None = None,
    fault_map: FaultMap | None = None,
) -> None:
    """Add the fault boundary to ``app``.

    Starlette applies middleware in reverse order of ``add_middleware`` calls,
    so call this after any other ``add_middleware`` to keep it outermost.
    """
    app.add_middleware(
        ApiResponseExceptionMiddleware, settings=settings, fault_map=fault_map
    )
