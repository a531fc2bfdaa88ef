"""Generic API response envelope model.

All API responses are wrapped in this envelope for consistency:
{ success, message, data, errors, meta, code }

Instances are immutable and are built through the ``ok``, ``no_content`` and
``fail`` factories rather than by calling the constructor directly.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api_response.models.errors import ApiError

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for all API responses."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    success: bool
    message: str | None = None
    data: T | None = None
    errors: list[ApiError] | None = None
    meta: dict[str, Any] | None = None
    code: int | None = None

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def ok(
        cls,
        data: T | None,
        message: str | None = None,
        meta: dict[str, Any] | None = None,
        code: int | None = 200,
    ) -> ApiResponse[T]:
        """Successful response carrying ``data``."""
        return cls(success=True, data=data, message=message, meta=meta, code=code)

    @classmethod
    def no_content(
        cls,
        message: str | None = None,
        code: int | None = 204,
    ) -> ApiResponse[T]:
        """Successful response without a payload (HTTP 204 by default)."""
        return cls(success=True, data=None, message=message, code=code)

    @classmethod
    def fail(
        cls,
        errors: ApiError | Sequence[ApiError],
        message: str | None = None,
        code: int | None = 400,
    ) -> ApiResponse[T]:
        """Failed response from one error or a non-empty sequence of errors.

        A single ``ApiError`` is wrapped into a one-element list, so
        ``fail(err)`` and ``fail([err])`` produce equal envelopes.

        Raises
        ------
        TypeError
            If ``errors`` is ``None``.
        ValueError
            If ``errors`` is an empty sequence.
        """
        if errors is None:
            raise TypeError("errors must not be None")
        if isinstance(errors, ApiError):
            return cls.fail([errors], message=message, code=code)

        error_list = list(errors)
        if not error_list:
            raise ValueError("a failed response needs at least one error")
        return cls(success=False, data=None, message=message, errors=error_list, code=code)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict with camelCase keys, nulls included."""
        return self.model_dump(mode="json", by_alias=True)
