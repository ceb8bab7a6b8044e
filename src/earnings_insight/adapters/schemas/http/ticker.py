# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Ticker Overview HTTP Schemas

Purpose:
    Wire shape of ``GET /ticker/{ticker}``: prices, reconciled quarters,
    narratives, summaries and (optionally) recent filings.

Layer: adapters/schemas/http
"""
from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import Field

from earnings_insight.adapters.schemas.http.base import BaseHTTPSchema
from earnings_insight.adapters.schemas.http.narrative import (
    BrokenPromiseHTTP,
    NarrativeEntryHTTP,
)

Direction = Literal["up", "down", "flat"]
Guidance = Literal["Conservative", "Accurate", "Optimistic"]


class PricePointHTTP(BaseHTTPSchema):
    date: dt.date
    close: float


class EarningsQuarterHTTP(BaseHTTPSchema):
    """One reconciled quarter.

    Revenue fields are in billions; live data reports ``0`` for both.
    """

    quarter: str = Field(..., examples=["Q1 2025"])
    date: dt.date
    eps_estimate: float
    eps_actual: float
    surprise_percent: float
    revenue_estimate: float = 0.0
    revenue_actual: float = 0.0
    stock_reaction: float = Field(..., description="Percent move across the report date.")
    transparency_score: int = Field(..., ge=0, le=100)


class MasterSummaryHTTP(BaseHTTPSchema):
    big_picture: str
    transparency_trend: str
    transparency_trend_direction: Direction
    broken_promises: list[BrokenPromiseHTTP] = Field(default_factory=list)
    beat_count: int
    miss_count: int
    avg_surprise: float
    revenue_trend: Direction
    guidance_accuracy: Guidance


class YearlySummaryHTTP(BaseHTTPSchema):
    beat_count: int
    miss_count: int
    avg_surprise: float
    revenue_trend: Direction
    guidance_accuracy: Guidance
    overall_sentiment: str


class FilingHTTP(BaseHTTPSchema):
    date: dt.date
    form: str
    description: str
    url: str
    accession_number: str


class TickerOverviewHTTP(BaseHTTPSchema):
    """``GET /ticker/{ticker}`` response body."""

    ticker: str = Field(..., examples=["AAPL"])
    company_name: str
    sector: str
    overall_transparency_score: int = Field(..., ge=0, le=100)
    prices: list[PricePointHTTP]
    earnings: list[EarningsQuarterHTTP]
    truth_translator: list[NarrativeEntryHTTP]
    master_summary: MasterSummaryHTTP
    yearly_summary: YearlySummaryHTTP
    is_demo: bool = False
    filings: list[FilingHTTP] | None = None
