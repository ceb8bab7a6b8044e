# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Reconciled Quarter (Domain Entity).

Synopsis:
    The per-quarter record built from one ticker request: provider EPS data,
    the realized stock reaction, the heuristic transparency score and the
    nearest 8-K filing (if any).

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from earnings_insight.domain.entities.base import BaseEntity
from earnings_insight.domain.entities.market import EarningsRecord, FilingRecord


@dataclass(frozen=True)
class ReconciledQuarter(BaseEntity):
    """One reporting period with derived metrics attached.

    Revenue figures (billions) are only known for curated data; live quarters
    carry 0.0 because the earnings feed reports EPS only.
    """

    quarter: str
    report_date: date
    eps_estimate: float
    eps_actual: float
    surprise_percent: float
    stock_reaction_percent: float
    transparency_score: int
    nearest_filing: FilingRecord | None = None
    revenue_estimate: float = 0.0
    revenue_actual: float = 0.0

    def __post_init__(self) -> None:
        if not 0 <= self.transparency_score <= 100:
            raise ValueError("transparency_score must be within [0, 100]")

    @classmethod
    def from_earnings(
        cls,
        record: EarningsRecord,
        *,
        stock_reaction_percent: float,
        transparency_score: int,
        nearest_filing: FilingRecord | None = None,
    ) -> ReconciledQuarter:
        """Attach derived metrics to an earnings record."""
        return cls(
            quarter=record.quarter,
            report_date=record.report_date,
            eps_estimate=record.eps_estimate,
            eps_actual=record.eps_actual,
            surprise_percent=record.surprise_percent,
            stock_reaction_percent=stock_reaction_percent,
            transparency_score=transparency_score,
            nearest_filing=nearest_filing,
        )

    @property
    def is_beat(self) -> bool:
        return self.eps_actual >= self.eps_estimate
