"""Configuration module."""

from api_response.config.settings import ApiResponseSettings

__all__ = ["ApiResponseSettings"]
