# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Narrative HTTP Schemas

Purpose:
    Wire shapes of ``GET /analyze/{ticker}/{quarter}`` (one script-vs-reality
    entry) and ``GET /summarize/{ticker}`` (big picture plus broken promises).

Layer: adapters/schemas/http
"""
from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import Field

from earnings_insight.adapters.schemas.http.base import BaseHTTPSchema

VerdictLiteral = Literal["delivered", "partial", "missed"]


class NarrativeEntryHTTP(BaseHTTPSchema):
    """Script vs. reality for one quarter; the three lists are index-aligned."""

    quarter: str
    date: dt.date
    script: list[str] = Field(..., min_length=3, max_length=3)
    reality: list[str] = Field(..., min_length=3, max_length=3)
    verdicts: list[VerdictLiteral] = Field(..., min_length=3, max_length=3)
    analyst_take: str
    filing_url: str | None = None


class BrokenPromiseHTTP(BaseHTTPSchema):
    quarter: str
    promise: str
    reality: str
    verdict: Literal["missed", "partial"]


class AggregateNarrativeHTTP(BaseHTTPSchema):
    """``GET /summarize/{ticker}`` response body."""

    big_picture: str
    broken_promises: list[BrokenPromiseHTTP] = Field(default_factory=list, max_length=3)
