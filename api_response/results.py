"""Turning endpoint results and envelopes into HTTP responses.

``wrap_result`` is the auto-wrap decision applied to whatever an endpoint
returns. ``resolve_status_code`` and ``to_response`` render an envelope that
handler code built explicitly.
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse
from starlette.responses import Response

from api_response.models.responses import ApiResponse

HTTP_200 = 200
HTTP_204 = 204
HTTP_400 = 400


def resolve_status_code(response: ApiResponse[Any]) -> int:
    """Explicit ``code`` if set, otherwise 200 on success and 400 on failure."""
    if response.code is not None:
        return response.code
    return HTTP_200 if response.success else HTTP_400


def to_response(response: ApiResponse[Any]) -> JSONResponse:
    """Render an envelope as a ``JSONResponse`` with its resolved status."""
    return JSONResponse(
        status_code=resolve_status_code(response),
        content=response.to_wire(),
    )


def _is_no_content(result: Any, status_code: int | None) -> bool:
    # Only a bare Response counts; subclasses carry a body of their own.
    if type(result) is Response:
        return result.status_code == HTTP_204
    return result is None and status_code == HTTP_204


def wrap_result(
    result: Any,
    status_code: int | None = None,
    no_content_status_code: int = HTTP_204,
) -> Any:
    """Coerce an endpoint's return value into the response envelope.

    - an ``ApiResponse`` is returned unchanged;
    - "no content" becomes ``ApiResponse.no_content()`` carrying
      ``no_content_status_code``;
    - any other ``Response`` is returned unchanged;
    - anything else is the payload of ``ApiResponse.ok``, keeping the
      route's status code (``None`` when the route declares none).

    Envelopes are sent with ``resolve_status_code``. A 204 response has no
    body on the wire, so the no-content envelope itself only reaches the
    client when ``no_content_status_code`` is a status that allows one,
    such as 200.
    """
    if isinstance(result, ApiResponse):
        return result

    if _is_no_content(result, status_code):
        return ApiResponse.no_content(code=no_content_status_code)

    if isinstance(result, Response):
        return result

    return ApiResponse.ok(result, message=None, code=status_code)
