# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Dependency wiring for the ticker overview (gateways, use case).

Overview:
    Provides the :class:`GetTickerOverviewUseCase` consumed by the ticker
    router. Clients are built per request and closed when the request ends.

Layer:
    dependencies

Design:
    * Always return the real use case type; tests swap it through
      ``app.dependency_overrides``.
    * Live sources count as configured only when both the price and the
      earnings keys are usable; otherwise the use case serves demo data.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from earnings_insight.adapters.gateways.demo_catalog import StaticDemoCatalog
from earnings_insight.adapters.gateways.edgar_gateway import EdgarGateway
from earnings_insight.adapters.gateways.finnhub_gateway import FinnhubGateway
from earnings_insight.adapters.gateways.polygon_gateway import PolygonGateway
from earnings_insight.application.use_cases.ticker.get_ticker_overview import (
    GetTickerOverviewUseCase,
)
from earnings_insight.dependencies.providers import (
    get_edgar_settings,
    get_finnhub_settings,
    get_polygon_settings,
)
from earnings_insight.infrastructure.external_apis.edgar.client import EdgarClient
from earnings_insight.infrastructure.external_apis.finnhub.client import FinnhubClient
from earnings_insight.infrastructure.external_apis.polygon.client import PolygonClient
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

_DEMO_CATALOG = StaticDemoCatalog()


def get_demo_catalog() -> StaticDemoCatalog:
    return _DEMO_CATALOG


def live_market_sources_configured() -> bool:
    """True when both Polygon and Finnhub credentials are usable."""
    polygon = get_polygon_settings().api_key_configured
    finnhub = get_finnhub_settings().api_key_configured
    logger.debug(
        "market_sources_configuration",
        extra={"polygon_configured": polygon, "finnhub_configured": finnhub},
    )
    return polygon and finnhub


async def get_ticker_overview_uc() -> AsyncGenerator[GetTickerOverviewUseCase, None]:
    """Provide a ticker overview use case wired to live clients."""
    polygon = PolygonClient(get_polygon_settings())
    finnhub = FinnhubClient(get_finnhub_settings())
    edgar = EdgarClient(get_edgar_settings())
    try:
        yield GetTickerOverviewUseCase(
            prices=PolygonGateway(polygon),
            earnings=FinnhubGateway(finnhub),
            filings=EdgarGateway(edgar),
            demo=get_demo_catalog(),
            live_sources_configured=live_market_sources_configured(),
        )
    finally:
        for client in (polygon, finnhub, edgar):
            await client.aclose()
