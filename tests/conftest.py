"""Shared test fixtures for the api_response test suite."""

from __future__ import annotations

import os

import pytest

from api_response.config.settings import ApiResponseSettings


# ---------------------------------------------------------------------------
# Keep the host environment from leaking into ApiResponseSettings
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove any API_RESPONSE_* variables so tests see the defaults."""
    for key in list(os.environ):
        if key.startswith("API_RESPONSE_"):
            monkeypatch.delenv(key)


# ---------------------------------------------------------------------------
# Settings fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def response_settings() -> ApiResponseSettings:
    """Default settings: raw exception messages are exposed."""
    return ApiResponseSettings()


@pytest.fixture
def redacted_settings() -> ApiResponseSettings:
    """Settings that hide raw exception messages from clients."""
    return ApiResponseSettings(expose_exception_details=False)
