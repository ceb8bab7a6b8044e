# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Ticker Snapshot (Domain Entity).

The full reconciled record returned for one ticker: identity, one year of
closes, reconciled quarters (ascending by report date), placeholder narratives
and summary stubs.
"""

from __future__ import annotations

from dataclasses import dataclass

from earnings_insight.domain.entities.base import BaseEntity
from earnings_insight.domain.entities.market import FilingRecord, PricePoint
from earnings_insight.domain.entities.narrative import (
    MasterSummary,
    NarrativeEntry,
    YearlySummary,
)
from earnings_insight.domain.entities.reconciled_quarter import ReconciledQuarter


@dataclass(frozen=True)
class TickerSnapshot(BaseEntity):
    """Everything the dashboard renders for a ticker.

    Attributes:
        ticker: Upper-cased symbol.
        company_name: Profile name, or the ticker when no profile exists.
        sector: Profile industry, or ``"Unknown"``.
        overall_transparency_score: Rounded mean of quarter scores.
        prices: Ascending daily closes.
        quarters: Reconciled quarters, ascending by report date.
        narratives: One placeholder (or curated) entry per quarter.
        master_summary: Cross-quarter statistics.
        yearly_summary: Legacy summary block.
        is_demo: True when the bundled demo fixture was served.
        filings: Recent 8-K filings, when the filings lookup succeeded.
    """

    ticker: str
    company_name: str
    sector: str
    overall_transparency_score: int
    prices: tuple[PricePoint, ...]
    quarters: tuple[ReconciledQuarter, ...]
    narratives: tuple[NarrativeEntry, ...]
    master_summary: MasterSummary
    yearly_summary: YearlySummary
    is_demo: bool = False
    filings: tuple[FilingRecord, ...] | None = None
