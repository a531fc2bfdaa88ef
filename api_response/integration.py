"""One-call integration of the response conventions into a FastAPI app."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from api_response.config.settings import ApiResponseSettings
from api_response.logging_config import configure_logging
from api_response.middleware.error_handler import FaultMap, use_exception_handler
from api_response.problem_details import register_problem_handlers
from api_response.routing import use_auto_wrap

logger = logging.getLogger(__name__)


def setup_api_response(
    app: FastAPI,
    settings: ApiResponseSettings | None = None,
    fault_map: FaultMap | None = None,
    *,
    auto_wrap: bool = True,
    json_logging: bool = False,
) -> ApiResponseSettings:
    """Install auto-wrapping, problem handlers and the fault boundary on ``app``.

    Call before declaring routes on ``app``; routes that already exist keep
    their original route class. With ``json_logging`` the root logger is
    switched to JSON output at ``settings.log_level``. Returns the settings
    in effect.
    """
    settings = settings or ApiResponseSettings()

    if json_logging:
        configure_logging(settings.log_level)

    if auto_wrap:
        use_auto_wrap(app, no_content_status_code=settings.no_content_status_code)
    register_problem_handlers(app)
    use_exception_handler(app, settings=settings, fault_map=fault_map)

    logger.info(
        "API response conventions installed (auto_wrap=%s, expose_exception_details=%s)",
        auto_wrap,
        settings.expose_exception_details,
    )
    return settings
