# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Error HTTP Schemas

Purpose:
    Flat error bodies. ``/ticker`` failures carry ``isDemo`` or ``hint``;
    narrative failures carry ``errorType``.

Layer: adapters/schemas/http
"""
from __future__ import annotations

from typing import Literal

from earnings_insight.adapters.schemas.http.base import BaseHTTPSchema

ErrorType = Literal["config", "data", "gemini", "unknown"]


class ErrorHTTP(BaseHTTPSchema):
    error: str
    error_type: ErrorType | None = None
    hint: str | None = None
    is_demo: bool | None = None
