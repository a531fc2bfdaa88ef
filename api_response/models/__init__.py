"""Envelope models: errors, responses and paging."""

from api_response.models.errors import ApiError
from api_response.models.paging import PagedMeta, PagedResponse
from api_response.models.responses import ApiResponse

__all__ = [
    "ApiError",
    "ApiResponse",
    "PagedMeta",
    "PagedResponse",
]
