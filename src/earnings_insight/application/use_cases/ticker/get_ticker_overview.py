# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Use case: Get ticker overview.

Synopsis:
    Builds the full reconciled record for one ticker from the three feeds.

Flow:
    1. Unconfigured price or earnings credentials: serve the demo snapshot,
       or raise ``ConfigurationError`` when none is bundled.
    2. Fetch prices, earnings, profile and filings concurrently.
    3. Prices and earnings are required (errors propagate); profile and
       filings are optional (errors become "absent").
    4. Missing prices or earnings: demo snapshot if bundled, else
       ``DataUnavailableError``.
    5. Reconcile quarters (ascending by report date) and attach the summary
       stubs.
"""

from __future__ import annotations

from earnings_insight.application.interfaces.demo_catalog import DemoCatalog
from earnings_insight.application.interfaces.market_data_gateway import (
    EarningsGateway,
    FilingsGateway,
    PriceSeriesGateway,
)
from earnings_insight.application.services.source_results import (
    SourcePolicy,
    gather_sources,
    resolve,
)
from earnings_insight.domain.entities.market import CompanyProfile, PricePoint
from earnings_insight.domain.entities.ticker_snapshot import TickerSnapshot
from earnings_insight.domain.exceptions.base import ConfigurationError, DataUnavailableError
from earnings_insight.domain.services.metrics_reconciler import (
    derive_overall_transparency,
    reconcile_quarters,
)
from earnings_insight.domain.services.summary_builder import (
    build_master_summary,
    build_placeholder_narratives,
    build_yearly_summary,
)
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

UNKNOWN_SECTOR = "Unknown"


class GetTickerOverviewUseCase:
    """Reconcile prices, earnings and filings into a ``TickerSnapshot``."""

    def __init__(
        self,
        *,
        prices: PriceSeriesGateway,
        earnings: EarningsGateway,
        filings: FilingsGateway,
        demo: DemoCatalog,
        live_sources_configured: bool,
    ) -> None:
        self._prices = prices
        self._earnings = earnings
        self._filings = filings
        self._demo = demo
        self._live = live_sources_configured

    async def execute(self, ticker: str) -> TickerSnapshot:
        """Execute the use case.

        Args:
            ticker: Symbol as typed by the user; upper-cased here.

        Returns:
            A live snapshot, or the bundled demo snapshot (``is_demo=True``).

        Raises:
            ConfigurationError: Live sources unconfigured and no demo exists.
            DataUnavailableError: No prices or no earnings and no demo exists.
            DomainError: A required source failed.
        """
        symbol = ticker.strip().upper()

        if not self._live:
            logger.info("ticker_sources_unconfigured", extra={"ticker": symbol})
            demo = self._demo.get(symbol)
            if demo is None:
                raise ConfigurationError(
                    "API keys not configured and no mock data available",
                    details={"ticker": symbol},
                )
            return demo

        results = await gather_sources(
            {
                "prices": self._prices.fetch_daily_closes(symbol),
                "earnings": self._earnings.fetch_earnings(symbol),
                "profile": self._earnings.fetch_company_profile(symbol),
                "filings": self._filings.fetch_recent_filings(symbol),
            }
        )
        prices: list[PricePoint] | None = resolve(results["prices"], SourcePolicy.REQUIRED)
        earnings = resolve(results["earnings"], SourcePolicy.REQUIRED)
        profile: CompanyProfile | None = resolve(results["profile"], SourcePolicy.OPTIONAL)
        filings = resolve(results["filings"], SourcePolicy.OPTIONAL)

        logger.info(
            "ticker_sources_settled",
            extra={
                "ticker": symbol,
                "prices": len(prices) if prices else 0,
                "earnings": len(earnings) if earnings else 0,
                "profile": profile is not None,
                "filings": len(filings) if filings else 0,
            },
        )

        if not prices or not earnings:
            demo = self._demo.get(symbol)
            if demo is not None:
                logger.info("ticker_insufficient_data_demo", extra={"ticker": symbol})
                return demo
            raise DataUnavailableError(
                f'No earnings data found for "{symbol}". Make sure you\'re using a stock '
                "ticker symbol (e.g., NVDA not Nvidia).",
                details={"ticker": symbol},
            )

        quarters = reconcile_quarters(earnings, prices, filings)
        company_name = profile.name if profile and profile.name else symbol
        sector = profile.sector if profile and profile.sector else UNKNOWN_SECTOR

        return TickerSnapshot(
            ticker=symbol,
            company_name=company_name,
            sector=sector,
            overall_transparency_score=derive_overall_transparency(quarters),
            prices=tuple(prices),
            quarters=tuple(quarters),
            narratives=tuple(build_placeholder_narratives(quarters)),
            master_summary=build_master_summary(quarters, company_name),
            yearly_summary=build_yearly_summary(quarters, company_name),
            is_demo=False,
            filings=tuple(filings) if filings else None,
        )
