# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Use case: Summarize a ticker across quarters.

Synopsis:
    Produces the ``AggregateNarrative`` (big picture + broken promises) for a
    ticker, cached under ``summary:{TICKER}``. Prices are optional here: when
    they fail, reactions are reported as 0.
"""

from __future__ import annotations

from earnings_insight.application.interfaces.cache_port import CachePort
from earnings_insight.application.interfaces.market_data_gateway import (
    EarningsGateway,
    PriceSeriesGateway,
)
from earnings_insight.application.interfaces.narrative_model import NarrativeModelPort
from earnings_insight.application.services.narrative_prompts import build_aggregate_prompt
from earnings_insight.application.services.narrative_synthesis import NarrativeSynthesis
from earnings_insight.application.services.source_results import (
    SourcePolicy,
    gather_sources,
    resolve,
)
from earnings_insight.domain.entities.market import CompanyProfile
from earnings_insight.domain.entities.narrative import AggregateNarrative
from earnings_insight.domain.exceptions.base import ConfigurationError, DataUnavailableError
from earnings_insight.domain.services.metrics_reconciler import reconcile_quarters
from earnings_insight.domain.services.narrative_contract import (
    aggregate_from_mapping,
    aggregate_to_mapping,
    parse_aggregate_narrative,
)
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def summary_cache_key(ticker: str) -> str:
    return f"summary:{ticker.upper()}"


class SummarizeTickerUseCase:
    """Aggregate narrative synthesis with a response cache in front."""

    def __init__(
        self,
        *,
        earnings: EarningsGateway,
        prices: PriceSeriesGateway,
        model: NarrativeModelPort,
        cache: CachePort,
        model_configured: bool,
        cache_ttl_s: float,
    ) -> None:
        self._earnings = earnings
        self._prices = prices
        self._model = model
        self._cache = cache
        self._model_configured = model_configured
        self._ttl_s = cache_ttl_s

    async def execute(self, ticker: str) -> AggregateNarrative:
        """Execute the use case.

        Raises:
            ConfigurationError: Model credential missing.
            DataUnavailableError: No earnings for the ticker.
            DomainError: Earnings provider or model failure.
        """
        symbol = ticker.strip().upper()
        if not self._model_configured:
            raise ConfigurationError("Gemini API key not configured")

        results = await gather_sources(
            {
                "earnings": self._earnings.fetch_earnings(symbol),
                "profile": self._earnings.fetch_company_profile(symbol),
                "prices": self._prices.fetch_daily_closes(symbol),
            }
        )
        earnings = resolve(results["earnings"], SourcePolicy.REQUIRED)
        profile: CompanyProfile | None = resolve(results["profile"], SourcePolicy.OPTIONAL)
        prices = resolve(results["prices"], SourcePolicy.OPTIONAL) or []

        if not earnings:
            raise DataUnavailableError(
                f"No earnings data found for {symbol}", details={"ticker": symbol}
            )

        quarters = reconcile_quarters(earnings, prices)
        company_name = profile.name if profile and profile.name else symbol
        logger.info(
            "summarize_inputs_ready",
            extra={"ticker": symbol, "quarters": len(quarters), "prices": len(prices)},
        )

        synthesis: NarrativeSynthesis[AggregateNarrative] = NarrativeSynthesis(
            key=summary_cache_key(symbol),
            scope="aggregate",
            cache=self._cache,
            model=self._model,
            ttl_s=self._ttl_s,
            encode=aggregate_to_mapping,
            decode=aggregate_from_mapping,
        )
        return await synthesis.run(
            build_aggregate_prompt(symbol, company_name, quarters),
            parse_aggregate_narrative,
        )
