# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Dependency wiring for narrative synthesis (``/analyze``, ``/summarize``).

Layer:
    dependencies
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from earnings_insight.adapters.gateways.edgar_gateway import EdgarGateway
from earnings_insight.adapters.gateways.finnhub_gateway import FinnhubGateway
from earnings_insight.adapters.gateways.gemini_gateway import GeminiGateway
from earnings_insight.adapters.gateways.polygon_gateway import PolygonGateway
from earnings_insight.application.use_cases.narrative.analyze_quarter import (
    AnalyzeQuarterUseCase,
)
from earnings_insight.application.use_cases.narrative.summarize_ticker import (
    SummarizeTickerUseCase,
)
from earnings_insight.config.settings import get_settings
from earnings_insight.dependencies.providers import (
    get_edgar_settings,
    get_finnhub_settings,
    get_gemini_settings,
    get_narrative_cache,
    get_polygon_settings,
)
from earnings_insight.infrastructure.external_apis.edgar.client import EdgarClient
from earnings_insight.infrastructure.external_apis.finnhub.client import FinnhubClient
from earnings_insight.infrastructure.external_apis.gemini.client import GeminiClient
from earnings_insight.infrastructure.external_apis.polygon.client import PolygonClient


async def get_analyze_quarter_uc() -> AsyncGenerator[AnalyzeQuarterUseCase, None]:
    """Provide the per-quarter analysis use case."""
    settings = get_settings()
    gemini_settings = get_gemini_settings()
    finnhub = FinnhubClient(get_finnhub_settings())
    edgar = EdgarClient(get_edgar_settings())
    gemini = GeminiClient(gemini_settings)
    try:
        yield AnalyzeQuarterUseCase(
            earnings=FinnhubGateway(finnhub),
            filings=EdgarGateway(edgar),
            model=GeminiGateway(gemini),
            cache=get_narrative_cache(),
            model_configured=gemini_settings.api_key_configured,
            cache_ttl_s=settings.narrative_cache_ttl_s,
            filings_limit=settings.analyze_filings_limit,
        )
    finally:
        for client in (finnhub, edgar, gemini):
            await client.aclose()


async def get_summarize_ticker_uc() -> AsyncGenerator[SummarizeTickerUseCase, None]:
    """Provide the aggregate summary use case."""
    settings = get_settings()
    gemini_settings = get_gemini_settings()
    finnhub = FinnhubClient(get_finnhub_settings())
    polygon = PolygonClient(get_polygon_settings())
    gemini = GeminiClient(gemini_settings)
    try:
        yield SummarizeTickerUseCase(
            earnings=FinnhubGateway(finnhub),
            prices=PolygonGateway(polygon),
            model=GeminiGateway(gemini),
            cache=get_narrative_cache(),
            model_configured=gemini_settings.api_key_configured,
            cache_ttl_s=settings.narrative_cache_ttl_s,
        )
    finally:
        for client in (finnhub, polygon, gemini):
            await client.aclose()
