# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Adapter Gateway: Polygon daily aggregates → ``PricePoint`` series.

Design principles:
    * The window is the trailing calendar year ending today (UTC).
    * Bars without a timestamp (``t``, Unix ms) or close (``c``) are skipped;
      closes are rounded to cents.
    * An empty result is "no data" (``None``), not an error.
    * Without a usable API key no request is made and the series is ``None``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from earnings_insight.application.interfaces.market_data_gateway import PriceSeriesGateway
from earnings_insight.domain.entities.market import PricePoint
from earnings_insight.domain.exceptions.market_data import MarketDataValidationError
from earnings_insight.domain.services.metrics_reconciler import round_half_away
from earnings_insight.infrastructure.external_apis.polygon.client import PolygonClient
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def _utc_today() -> date:
    return datetime.now(UTC).date()


def one_year_before(day: date) -> date:
    """Same calendar day one year earlier (Feb 29 falls back to Feb 28)."""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=28)


def _bar_to_point(bar: Any) -> PricePoint | None:
    if not isinstance(bar, Mapping):
        return None
    ts, close = bar.get("t"), bar.get("c")
    if ts is None or close is None:
        return None
    try:
        day = datetime.fromtimestamp(float(ts) / 1000.0, tz=UTC).date()
        return PricePoint(date=day, close=round_half_away(float(close), 2))
    except (TypeError, ValueError, OverflowError) as exc:
        raise MarketDataValidationError(
            "Polygon returned an unreadable bar", details={"bar": dict(bar)}
        ) from exc


class PolygonGateway(PriceSeriesGateway):
    """Price series gateway backed by :class:`PolygonClient`."""

    def __init__(self, client: PolygonClient, *, today: Callable[[], date] = _utc_today) -> None:
        self._client = client
        self._today = today

    async def fetch_daily_closes(self, ticker: str) -> list[PricePoint] | None:
        if not self._client.configured:
            logger.warning("polygon_key_unconfigured", extra={"ticker": ticker})
            return None
        end = self._today()
        payload = await self._client.daily_aggregates(ticker, one_year_before(end), end)
        bars = payload.get("results") or []
        if not isinstance(bars, list):
            raise MarketDataValidationError(
                "Polygon results must be a list", details={"type": type(bars).__name__}
            )

        points = [p for p in (_bar_to_point(b) for b in bars) if p is not None]
        logger.info(
            "polygon_prices_mapped",
            extra={
                "ticker": ticker,
                "status": payload.get("status"),
                "bars": len(bars),
                "points": len(points),
            },
        )
        return points or None
