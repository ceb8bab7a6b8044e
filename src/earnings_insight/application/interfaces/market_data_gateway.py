# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Application Interfaces: Market, Earnings and Filings Gateways.

Synopsis:
    Ports for the three external feeds. Each returns domain records or
    ``None`` for an ordinary "no data" answer and raises a ``DomainError`` for
    transport or credential failures.

Layer:
    application/interfaces
"""

from __future__ import annotations

from typing import Protocol

from earnings_insight.domain.entities.market import (
    CompanyProfile,
    EarningsRecord,
    FilingRecord,
    PricePoint,
)


class PriceSeriesGateway(Protocol):
    """Trailing one-year daily closes."""

    async def fetch_daily_closes(self, ticker: str) -> list[PricePoint] | None:
        """Return ascending closes, or ``None`` when the provider has none."""


class EarningsGateway(Protocol):
    """Quarterly EPS surprises and company identity."""

    async def fetch_earnings(self, ticker: str) -> list[EarningsRecord] | None:
        """Return up to four quarters in provider order, or ``None``."""

    async def fetch_company_profile(self, ticker: str) -> CompanyProfile | None:
        """Return the profile, or ``None`` when the provider has no name for it."""


class FilingsGateway(Protocol):
    """Recent 8-K filings from SEC EDGAR."""

    async def fetch_recent_filings(
        self, ticker: str, *, limit: int = 4
    ) -> list[FilingRecord] | None:
        """Return up to ``limit`` filings, newest first, or ``None``."""
