"""Single error entry carried inside a failed API response envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiError(BaseModel):
    """One error in an ``ApiResponse``.

    ``message`` is the only required field and must be non-empty. ``code`` is
    a machine-readable identifier, ``field`` names the offending input for
    validation failures, and ``meta`` holds any extra context.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    code: str | None = None
    message: str = Field(min_length=1)
    field: str | None = None
    meta: dict[str, Any] | None = None
