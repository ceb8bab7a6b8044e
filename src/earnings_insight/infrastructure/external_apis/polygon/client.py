# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Polygon Transport Client (aggregates v2).

Endpoints:
    * ``daily_aggregates``: ``/v2/aggs/ticker/{T}/range/1/day/{from}/{to}``,
      adjusted, ascending.

Errors:
    * Transport failures and non-2xx: ``MarketDataUnavailable``.
    * Non-JSON or non-object bodies: ``MarketDataValidationError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any
from urllib.parse import quote

import httpx

from earnings_insight.domain.exceptions.market_data import (
    MarketDataUnavailable,
    MarketDataValidationError,
)
from earnings_insight.infrastructure.external_apis.base_client import JsonHttpClient
from earnings_insight.infrastructure.external_apis.polygon.settings import PolygonSettings


class PolygonClient(JsonHttpClient):
    """Async client for Polygon daily bars."""

    provider = "polygon"
    display_name = "Polygon"
    unavailable_error = MarketDataUnavailable
    malformed_error = MarketDataValidationError

    def __init__(
        self,
        settings: PolygonSettings,
        *,
        http: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ) -> None:
        super().__init__(
            base_url=settings.base_url,
            timeout_s=timeout_s if timeout_s is not None else settings.timeout_s,
            http=http,
        )
        self._api_key = settings.api_key.get_secret_value() if settings.api_key else ""
        self.configured = settings.api_key_configured

    async def daily_aggregates(self, ticker: str, start: date, end: date) -> Mapping[str, Any]:
        """Fetch adjusted daily bars for ``ticker`` between ``start`` and ``end``.

        Returns:
            The raw response object (``results`` holds ``t``/``c`` bars).
        """
        path = (
            f"/v2/aggs/ticker/{quote(ticker, safe='')}/range/1/day/"
            f"{start.isoformat()}/{end.isoformat()}"
        )
        payload = await self._get_json(
            path,
            endpoint="daily_aggregates",
            label="Polygon prices",
            params={"adjusted": "true", "sort": "asc", "apiKey": self._api_key},
        )
        if not isinstance(payload, Mapping):
            raise MarketDataValidationError(
                "Polygon prices response must be an object",
                details={"type": type(payload).__name__},
            )
        return payload
