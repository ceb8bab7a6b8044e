# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Base HTTP Schema (Adapters Layer)

Purpose:
    Canonical Pydantic base for adapter-layer HTTP schemas. Python attributes
    are snake_case; the wire uses camelCase aliases.

Layer: adapters/schemas/http

Notes:
    - Transport-facing only. Application and domain code never import this.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseHTTPSchema(BaseModel):
    """Base class for all HTTP-facing schemas.

    Attributes:
        model_config: Strict validation, camelCase aliases, enum values on
            the wire, and ``null`` for non-finite floats.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        ser_json_inf_nan="null",
        use_enum_values=True,
    )

    def model_dump_http(self, **kwargs: Any) -> dict[str, Any]:
        """Return a JSON-serializable dict using wire (camelCase) names.

        Args:
            **kwargs: Optional Pydantic dump settings (e.g., ``exclude_none=True``).
        """
        return self.model_dump(mode="json", by_alias=True, **kwargs)
