"""Pydantic Settings for the API response conventions.

All environment variables use the API_RESPONSE_ prefix.
Example: API_RESPONSE_EXPOSE_EXCEPTION_DETAILS=false
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ApiResponseSettings(BaseSettings):
    """Envelope and fault-boundary configuration validated from environment variables."""

    log_level: str = "INFO"

    # Fault boundary
    expose_exception_details: bool = True  # False hides raw exception messages
    internal_error_code: str = Field(default="INTERNAL_ERROR", min_length=1)
    internal_error_message: str = "Internal server error"
    redacted_error_message: str = Field(
        default="An unexpected error occurred", min_length=1
    )

    # Auto-wrap: 204 responses carry no body, 200 sends the no-content envelope
    no_content_status_code: int = Field(default=204, ge=200, le=299)

    model_config = {"env_prefix": "API_RESPONSE_"}
