# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Use case: Analyze one earnings quarter.

Synopsis:
    Produces the script-vs-reality ``NarrativeEntry`` for ``(ticker, quarter)``.

Flow:
    1. No model credential: ``ConfigurationError``.
    2. Fetch earnings (required), profile and filings (optional) concurrently.
    3. No earnings: ``DataUnavailableError``; unknown quarter:
       ``QuarterNotFound`` listing the available labels.
    4. Match the nearest 8-K (+/- 7 days) and run one synthesis, cached
       under ``analysis:{TICKER}:{quarter}``.
"""

from __future__ import annotations

from functools import partial

from earnings_insight.application.interfaces.cache_port import CachePort
from earnings_insight.application.interfaces.market_data_gateway import (
    EarningsGateway,
    FilingsGateway,
)
from earnings_insight.application.interfaces.narrative_model import NarrativeModelPort
from earnings_insight.application.services.narrative_prompts import (
    QuarterPromptContext,
    build_quarter_prompt,
)
from earnings_insight.application.services.narrative_synthesis import NarrativeSynthesis
from earnings_insight.application.services.source_results import (
    SourcePolicy,
    gather_sources,
    resolve,
)
from earnings_insight.domain.entities.market import CompanyProfile, EarningsRecord
from earnings_insight.domain.entities.narrative import NarrativeEntry
from earnings_insight.domain.exceptions.base import ConfigurationError, DataUnavailableError
from earnings_insight.domain.exceptions.market_data import QuarterNotFound
from earnings_insight.domain.services.metrics_reconciler import find_nearest_filing
from earnings_insight.domain.services.narrative_contract import (
    narrative_entry_from_mapping,
    narrative_entry_to_mapping,
    parse_narrative_entry,
)
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

ANALYZE_FILINGS_LIMIT = 10


def analysis_cache_key(ticker: str, quarter: str) -> str:
    return f"analysis:{ticker.upper()}:{quarter}"


class AnalyzeQuarterUseCase:
    """Per-quarter narrative synthesis with a response cache in front."""

    def __init__(
        self,
        *,
        earnings: EarningsGateway,
        filings: FilingsGateway,
        model: NarrativeModelPort,
        cache: CachePort,
        model_configured: bool,
        cache_ttl_s: float,
        filings_limit: int = ANALYZE_FILINGS_LIMIT,
    ) -> None:
        self._earnings = earnings
        self._filings = filings
        self._model = model
        self._cache = cache
        self._model_configured = model_configured
        self._ttl_s = cache_ttl_s
        self._filings_limit = filings_limit

    async def execute(
        self, ticker: str, quarter: str, *, stock_reaction: float = 0.0
    ) -> NarrativeEntry:
        """Execute the use case.

        Args:
            ticker: Symbol; upper-cased here.
            quarter: Quarter label exactly as listed by the provider.
            stock_reaction: Reaction the dashboard already computed for the
                quarter, embedded in the prompt.

        Raises:
            ConfigurationError: Model credential missing.
            DataUnavailableError: No earnings for the ticker.
            QuarterNotFound: ``quarter`` is not among the provider's labels.
            DomainError: Earnings provider or model failure.
        """
        symbol = ticker.strip().upper()
        if not self._model_configured:
            raise ConfigurationError("Gemini API key not configured")

        results = await gather_sources(
            {
                "earnings": self._earnings.fetch_earnings(symbol),
                "profile": self._earnings.fetch_company_profile(symbol),
                "filings": self._filings.fetch_recent_filings(
                    symbol, limit=self._filings_limit
                ),
            }
        )
        earnings: list[EarningsRecord] | None = resolve(
            results["earnings"], SourcePolicy.REQUIRED
        )
        profile: CompanyProfile | None = resolve(results["profile"], SourcePolicy.OPTIONAL)
        filings = resolve(results["filings"], SourcePolicy.OPTIONAL)

        if not earnings:
            raise DataUnavailableError(
                f"No earnings data found for {symbol}", details={"ticker": symbol}
            )

        record = next((r for r in earnings if r.quarter == quarter), None)
        if record is None:
            available = ", ".join(r.quarter for r in earnings)
            raise QuarterNotFound(
                f'No data for "{quarter}". Available: {available}',
                details={"ticker": symbol, "quarter": quarter},
            )

        filing = find_nearest_filing(record.report_date, filings) if filings else None
        logger.info(
            "analyze_filing_match",
            extra={
                "ticker": symbol,
                "quarter": quarter,
                "report_date": record.report_date.isoformat(),
                "filings_checked": len(filings) if filings else 0,
                "matched": filing.filing_date.isoformat() if filing else None,
            },
        )

        company_name = profile.name if profile and profile.name else symbol
        prompt = build_quarter_prompt(
            QuarterPromptContext(
                ticker=symbol,
                company_name=company_name,
                quarter=record.quarter,
                report_date=record.report_date,
                eps_estimate=record.eps_estimate,
                eps_actual=record.eps_actual,
                surprise_percent=record.surprise_percent,
                stock_reaction_percent=stock_reaction,
                filing_description=filing.description if filing else None,
            )
        )

        synthesis: NarrativeSynthesis[NarrativeEntry] = NarrativeSynthesis(
            key=analysis_cache_key(symbol, quarter),
            scope="quarter",
            cache=self._cache,
            model=self._model,
            ttl_s=self._ttl_s,
            encode=narrative_entry_to_mapping,
            decode=narrative_entry_from_mapping,
        )
        return await synthesis.run(
            prompt,
            partial(
                parse_narrative_entry,
                quarter=record.quarter,
                report_date=record.report_date,
                filing_url=filing.document_url if filing else None,
            ),
        )
