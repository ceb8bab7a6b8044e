# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Market and Fundamentals Records (Domain Entities).

Synopsis:
    Immutable records normalized from the external providers: daily closes,
    quarterly earnings surprises, the company profile and SEC filings.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from earnings_insight.domain.entities.base import BaseEntity


@dataclass(frozen=True)
class PricePoint(BaseEntity):
    """A single daily close.

    Attributes:
        date: Trading day (unique within a series).
        close: Closing price, strictly positive.
    """

    date: date
    close: float

    def __post_init__(self) -> None:
        if self.close <= 0:
            raise ValueError("close must be > 0")


@dataclass(frozen=True)
class EarningsRecord(BaseEntity):
    """One quarter of EPS estimate/actual as reported by the earnings provider.

    ``surprise_percent`` is the provider's figure and is kept as-is; it may
    disagree with a value recomputed from the EPS fields.

    Attributes:
        quarter: Label such as ``"Q1 2025"``.
        report_date: Date the quarter was reported.
        eps_estimate: Consensus EPS estimate.
        eps_actual: Reported EPS.
        surprise_percent: Provider-supplied surprise percentage.
    """

    quarter: str
    report_date: date
    eps_estimate: float
    eps_actual: float
    surprise_percent: float

    def __post_init__(self) -> None:
        if not self.quarter:
            raise ValueError("quarter label must be non-empty")

    @property
    def is_beat(self) -> bool:
        """True when actual EPS met or exceeded the estimate."""
        return self.eps_actual >= self.eps_estimate


@dataclass(frozen=True)
class CompanyProfile(BaseEntity):
    """Company identity used to label narratives."""

    name: str
    sector: str
    ticker: str


@dataclass(frozen=True)
class FilingRecord(BaseEntity):
    """Metadata for one SEC filing.

    Attributes:
        filing_date: Date the filing was accepted.
        form: Form type, e.g. ``"8-K"``.
        description: Primary document description.
        document_url: Direct link to the primary document on sec.gov.
        accession_id: SEC accession number (dashed form).
    """

    filing_date: date
    form: str
    description: str
    document_url: str
    accession_id: str
