"""Mapping RFC 7807 problem objects and FastAPI errors to the envelope.

``from_problem_details`` is the pure conversion. ``register_problem_handlers``
wires FastAPI's own error types (``HTTPException`` and
``RequestValidationError``) through it so that framework-generated errors are
sent in the same shape as everything else.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_response.models.errors import ApiError
from api_response.models.responses import ApiResponse
from api_response.results import to_response

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Error"
VALIDATION_FAILED_MESSAGE = "Validation Failed"
HTTP_422 = 422


class ProblemDetails(BaseModel):
    """RFC 7807 problem object. Every member is optional; extensions are kept."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    title: str | None = None
    status: int | None = None
    detail: str | None = None
    instance: str | None = None


def from_problem_details(
    problem: ProblemDetails | Mapping[str, Any],
) -> ApiResponse[Any]:
    """Convert a problem object into a failed ``ApiResponse``.

    The single error's message is ``detail``, falling back to ``title`` and
    then to ``"Error"`` (empty strings count as missing); its code is
    ``type``. The envelope's message is ``title`` and its code is ``status``.

    Example::

        from_problem_details({
            "title": "Validation Failed",
            "detail": "One or more fields are invalid.",
            "status": 400,
            "type": "validation_error",
        })
    """
    if not isinstance(problem, ProblemDetails):
        problem = ProblemDetails.model_validate(problem)

    error_message = problem.detail or problem.title or DEFAULT_ERROR_MESSAGE
    error = ApiError(message=error_message, code=problem.type)
    return ApiResponse.fail(error, message=problem.title, code=problem.status)


def problem_from_http_exception(exc: StarletteHTTPException) -> ProblemDetails:
    """Describe an ``HTTPException`` as a problem object."""
    try:
        title = HTTPStatus(exc.status_code).phrase
    except ValueError:
        title = None
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return ProblemDetails(title=title, detail=detail or None, status=exc.status_code)


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


async def _http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle ``HTTPException`` (404s, 405s, explicit raises)."""
    logger.warning("HTTP error %d: %s", exc.status_code, exc.detail)
    response = to_response(from_problem_details(problem_from_http_exception(exc)))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def _field_path(loc: Any) -> str | None:
    # Drop the "body"/"query"/... prefix FastAPI puts in front of the field path.
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in {"body", "query", "path", "header", "cookie"}:
        parts = parts[1:]
    return ".".join(parts) or None


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation failures with one error per invalid field."""
    errors = [
        ApiError(
            message=err.get("msg") or VALIDATION_FAILED_MESSAGE,
            code=err.get("type"),
            field=_field_path(err.get("loc", ())),
        )
        for err in exc.errors()
    ]
    if not errors:
        errors = [ApiError(message=VALIDATION_FAILED_MESSAGE, code="validation_error")]

    logger.warning("Request validation failed: %d error(s)", len(errors))
    return to_response(
        ApiResponse.fail(errors, message=VALIDATION_FAILED_MESSAGE, code=HTTP_422)
    )


def register_problem_handlers(app: FastAPI) -> None:
    """Wire FastAPI's own error types through the envelope."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
