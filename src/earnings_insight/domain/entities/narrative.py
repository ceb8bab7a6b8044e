# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Narrative Records (Domain Entities).

Synopsis:
    "Script vs. reality" narratives: one ``NarrativeEntry`` per quarter and one
    ``AggregateNarrative`` per ticker, plus the summary stubs shipped with the
    ticker snapshot before any model call is made.

Invariants:
    * ``NarrativeEntry`` holds exactly three script points, three reality
      points and three verdicts, index-aligned.
    * ``Contradiction.verdict`` is never ``delivered``.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from earnings_insight.domain.entities.base import BaseEntity

NARRATIVE_POINTS = 3
MAX_CONTRADICTIONS = 3


class Verdict(str, Enum):
    """How a management claim held up against the numbers."""

    DELIVERED = "delivered"
    PARTIAL = "partial"
    MISSED = "missed"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class GuidanceAccuracy(str, Enum):
    """Label derived from the average surprise over the covered quarters."""

    CONSERVATIVE = "Conservative"
    ACCURATE = "Accurate"
    OPTIMISTIC = "Optimistic"


@dataclass(frozen=True)
class NarrativeEntry(BaseEntity):
    """Script vs. reality for one quarter.

    Attributes:
        quarter: Quarter label.
        report_date: Report date of the quarter.
        script_points: What management wanted investors to hear.
        reality_points: What the numbers showed, aligned with ``script_points``.
        verdicts: ``verdicts[i]`` judges ``reality_points[i]`` against
            ``script_points[i]``.
        narrative_summary: Plain-language take for beginners.
        filing_url: Link to the matched 8-K, when one was found.
    """

    quarter: str
    report_date: date
    script_points: tuple[str, ...]
    reality_points: tuple[str, ...]
    verdicts: tuple[Verdict, ...]
    narrative_summary: str
    filing_url: str | None = None

    def __post_init__(self) -> None:
        for name in ("script_points", "reality_points", "verdicts"):
            if len(getattr(self, name)) != NARRATIVE_POINTS:
                raise ValueError(f"{name} must have exactly {NARRATIVE_POINTS} items")


@dataclass(frozen=True)
class Contradiction(BaseEntity):
    """A claim from one quarter that the outcome did not support."""

    quarter: str
    claim: str
    outcome: str
    verdict: Verdict

    def __post_init__(self) -> None:
        if self.verdict is Verdict.DELIVERED:
            raise ValueError("a contradiction cannot be 'delivered'")


@dataclass(frozen=True)
class AggregateNarrative(BaseEntity):
    """Cross-quarter summary with the broken-promise list."""

    overall_summary: str
    contradictions: tuple[Contradiction, ...] = ()


@dataclass(frozen=True)
class MasterSummary(BaseEntity):
    """Cross-quarter statistics shipped with a ticker snapshot.

    ``big_picture`` and ``broken_promises`` are placeholders for live tickers
    until an aggregate narrative is requested.
    """

    big_picture: str
    transparency_trend: str
    transparency_trend_direction: TrendDirection
    beat_count: int
    miss_count: int
    avg_surprise: float
    revenue_trend: TrendDirection
    guidance_accuracy: GuidanceAccuracy
    broken_promises: tuple[Contradiction, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class YearlySummary(BaseEntity):
    beat_count: int
    miss_count: int
    avg_surprise: float
    revenue_trend: TrendDirection
    guidance_accuracy: GuidanceAccuracy
    overall_sentiment: str
