# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Immutable domain records."""

from __future__ import annotations

from .market import CompanyProfile, EarningsRecord, FilingRecord, PricePoint
from .narrative import (
    AggregateNarrative,
    Contradiction,
    GuidanceAccuracy,
    MasterSummary,
    NarrativeEntry,
    TrendDirection,
    Verdict,
    YearlySummary,
)
from .reconciled_quarter import ReconciledQuarter
from .ticker_snapshot import TickerSnapshot

__all__ = [
    "AggregateNarrative",
    "CompanyProfile",
    "Contradiction",
    "EarningsRecord",
    "FilingRecord",
    "GuidanceAccuracy",
    "MasterSummary",
    "NarrativeEntry",
    "PricePoint",
    "ReconciledQuarter",
    "TickerSnapshot",
    "TrendDirection",
    "Verdict",
    "YearlySummary",
]
