# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Base HTTP Schema (Adapters Layer)

Purpose:
    Canonical Pydantic base for all adapter-layer HTTP schemas.
    Enforces strict config, deterministic JSON encoding, and OpenAPI hygiene.

Layer: adapters/schemas/http

Notes:
    - Transport-facing only. Application DTOs must not import from this module.
    - Decimals are emitted as JSON numbers (``JsonDecimal``): integral values
      as exact integers at any magnitude, others as the nearest float. Dates
      as ``YYYY-MM-DD``; UUIDs as canonical strings.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    PlainSerializer,
    SerializerFunctionWrapHandler,
    model_serializer,
)


def _json_number(value: Decimal) -> int | float:
    """Render a decimal as a JSON number: exact ``int`` when integral, else ``float``."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


JsonDecimal = Annotated[
    Decimal, PlainSerializer(_json_number, return_type=int | float, when_used="json")
]


class BaseHTTPSchema(BaseModel):
    """Base class for all HTTP-facing schemas.

    Attributes:
        model_config: Pydantic v2 `ConfigDict` with strict extra handling and
            enum values on the wire.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        ser_json_inf_nan="null",
        use_enum_values=True,
    )

    def model_dump_http(self, **kwargs: Any) -> dict[str, Any]:
        """Return a JSON-serializable dict suitable for HTTP responses.

        Args:
            **kwargs: Optional Pydantic dump settings (e.g., ``exclude_none=True``).
        """
        return self.model_dump(mode="json", **kwargs)


class OmitAbsentHTTPSchema(BaseHTTPSchema):
    """HTTP schema that drops selected fields from the output when they are ``None``.

    Subclasses list the optional keys in ``omit_when_none``. Other ``None``
    values (e.g. a policy without attainable pension) stay as ``null``.
    """

    model_config = ConfigDict(json_schema_mode_override="validation")

    omit_when_none: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _drop_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data: dict[str, Any] = handler(self)
        for key in self.omit_when_none:
            if data.get(key) is None:
                data.pop(key, None)
        return data
