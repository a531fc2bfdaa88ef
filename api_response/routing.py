"""Route class that wraps every endpoint result in the response envelope.

Usage::

    router = APIRouter(route_class=AutoWrapRoute)

    @router.get("/items/{item_id}")
    async def get_item(item_id: int) -> Item:
        return Item(id=item_id)   # sent as {"success": true, "data": {...}, ...}

or ``use_auto_wrap(app)`` before declaring routes on the app itself.

The route's response model (``response_model=`` or the return annotation)
becomes ``ApiResponse[<model>]``, so FastAPI still validates and filters the
payload and documents the envelope in OpenAPI.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI
from fastapi.datastructures import Default, DefaultPlaceholder
from fastapi.routing import APIRoute, APIRouter
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from api_response.models.responses import ApiResponse
from api_response.results import HTTP_204, resolve_status_code, wrap_result

_WRAPPED_MARKER = "__api_response_wrapped__"
_STATUS_PARAM = "api_response_status"


def _is_response_annotation(annotation: Any) -> bool:
    return inspect.isclass(annotation) and issubclass(annotation, Response)


def _with_status_param(signature: inspect.Signature) -> tuple[inspect.Signature, str, bool]:
    """Find or add the ``Response`` parameter FastAPI injects for status codes.

    Returns the signature to expose, the parameter name and whether the
    endpoint declared the parameter itself.
    """
    for name, param in signature.parameters.items():
        if _is_response_annotation(param.annotation):
            return signature, name, True

    params = list(signature.parameters.values())
    extra = inspect.Parameter(_STATUS_PARAM, inspect.Parameter.KEYWORD_ONLY, annotation=Response)
    if params and params[-1].kind is inspect.Parameter.VAR_KEYWORD:
        params.insert(len(params) - 1, extra)
    else:
        params.append(extra)
    return signature.replace(parameters=params), _STATUS_PARAM, False


def auto_wrap(
    endpoint: Callable[..., Any],
    status_code: int | None = None,
    no_content_status_code: int = HTTP_204,
) -> Callable[..., Any]:
    """Decorate ``endpoint`` so its return value goes through ``wrap_result``.

    The wrapper carries the endpoint's resolved signature so FastAPI still
    derives path, query and body parameters from it. Sync endpoints are run
    in the threadpool, as FastAPI would run them. Envelopes are handed back
    to FastAPI in wire form, so the route's response model still validates
    and filters them. The HTTP status comes from the envelope, set through
    the ``Response`` parameter FastAPI injects.
    """
    if getattr(endpoint, _WRAPPED_MARKER, False):
        return endpoint

    is_async = inspect.iscoroutinefunction(endpoint) or inspect.iscoroutinefunction(
        getattr(endpoint, "__call__", None)
    )
    signature, status_param, declared = _with_status_param(
        inspect.signature(endpoint, eval_str=True)
    )

    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        if declared:
            status_response = kwargs.get(status_param)
        else:
            status_response = kwargs.pop(status_param, None)

        if is_async:
            result = await endpoint(*args, **kwargs)
        else:
            result = await run_in_threadpool(endpoint, *args, **kwargs)

        wrapped = wrap_result(result, status_code, no_content_status_code)
        if not isinstance(wrapped, ApiResponse):
            return wrapped
        # A status set by the endpoint on its own Response parameter wins.
        if status_response is not None and status_response.status_code is None:
            status_response.status_code = resolve_status_code(wrapped)
        return wrapped.to_wire()

    functools.update_wrapper(wrapper, endpoint)
    # FastAPI must see the wrapper itself as the (async) endpoint.
    del wrapper.__wrapped__
    wrapper.__signature__ = signature  # type: ignore[attr-defined]
    setattr(wrapper, _WRAPPED_MARKER, True)
    return wrapper


def envelope_response_model(response_model: Any, endpoint: Callable[..., Any]) -> Any:
    """Response model for an auto-wrapped route.

    ``response_model`` falls back to the endpoint's return annotation when
    the route was declared without one. Payload models become
    ``ApiResponse[<model>]``, envelopes are kept, and ``Response`` classes
    mean no response model at all.
    """
    if isinstance(response_model, DefaultPlaceholder):
        response_model = inspect.signature(endpoint, eval_str=True).return_annotation
        if response_model is inspect.Signature.empty:
            return Default(None)

    if response_model is None or _is_response_annotation(response_model):
        return None
    if inspect.isclass(response_model) and issubclass(response_model, ApiResponse):
        return response_model
    return ApiResponse[response_model]


class AutoWrapRoute(APIRoute):
    """``APIRoute`` whose endpoint results are auto-wrapped in ``ApiResponse``.

    ``no_content_status_code`` is the status sent for "no content" results.
    204 responses carry no body; subclass with 200 to send the envelope.
    """

    no_content_status_code: int = HTTP_204

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        kwargs["response_model"] = envelope_response_model(
            kwargs.get("response_model", Default(None)), endpoint
        )
        super().__init__(
            path,
            endpoint=auto_wrap(
                endpoint, kwargs.get("status_code"), self.no_content_status_code
            ),
            **kwargs,
        )


def use_auto_wrap(
    target: FastAPI | APIRouter, no_content_status_code: int | None = None
) -> None:
    """Make routes declared from now on use ``AutoWrapRoute``."""
    route_class = AutoWrapRoute
    if no_content_status_code is not None and no_content_status_code != HTTP_204:
        route_class = type(
            "AutoWrapRoute",
            (AutoWrapRoute,),
            {"no_content_status_code": no_content_status_code},
        )
    router = target.router if isinstance(target, FastAPI) else target
    router.route_class = route_class
