"""Paged variant of the response envelope.

``PagedResponse.create`` builds a success envelope for one page of a list and
computes the page metadata. Invalid page numbers and sizes are clamped rather
than rejected, so a bad query string never fails the request.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api_response.models.responses import ApiResponse

T = TypeVar("T")


class PagedMeta(BaseModel):
    """Pagination metadata: 1-based page, page size and totals."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_items: int = Field(ge=0)
    total_pages: int = Field(ge=0)


class PagedResponse(ApiResponse[list[T]], Generic[T]):
    """Envelope whose ``data`` is one page of items.

    ``page_meta`` is the typed pagination metadata. The same four values are
    duplicated into the untyped ``meta`` dict, which is what goes on the wire.
    """

    page_meta: PagedMeta | None = Field(default=None, exclude=True)

    @classmethod
    def create(
        cls,
        items: Iterable[T] | None,
        page: int,
        page_size: int,
        total_items: int,
        message: str | None = None,
        code: int | None = 200,
    ) -> PagedResponse[T]:
        """Build a paged response from any iterable of items."""
        data = list(items) if items is not None else []

        if page <= 0:
            page = 1
        if page_size <= 0:
            page_size = 1
        if total_items < 0:
            total_items = 0

        total_pages = -(-total_items // page_size)
        page_meta = PagedMeta(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
        )
        meta: dict[str, Any] = page_meta.model_dump(by_alias=True)

        return cls(
            success=True,
            data=data,
            message=message,
            meta=meta,
            code=code,
            page_meta=page_meta,
        )
