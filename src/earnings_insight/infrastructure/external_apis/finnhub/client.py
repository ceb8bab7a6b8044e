# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Finnhub Transport Client.

Endpoints:
    * ``earnings``: ``/stock/earnings?symbol=&limit=`` (array of surprises).
    * ``profile``: ``/stock/profile2?symbol=`` (object; ``{}`` when unknown).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from earnings_insight.domain.exceptions.market_data import (
    EarningsDataUnavailable,
    MarketDataValidationError,
)
from earnings_insight.infrastructure.external_apis.base_client import JsonHttpClient
from earnings_insight.infrastructure.external_apis.finnhub.settings import FinnhubSettings


class FinnhubClient(JsonHttpClient):
    """Async client for Finnhub earnings surprises and company profiles."""

    provider = "finnhub"
    display_name = "Finnhub"
    unavailable_error = EarningsDataUnavailable
    malformed_error = MarketDataValidationError

    def __init__(
        self,
        settings: FinnhubSettings,
        *,
        http: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ) -> None:
        super().__init__(
            base_url=settings.base_url,
            timeout_s=timeout_s if timeout_s is not None else settings.timeout_s,
            http=http,
        )
        self._token = settings.api_key.get_secret_value() if settings.api_key else ""
        self.configured = settings.api_key_configured
        self._limit = settings.earnings_limit

    async def earnings(self, symbol: str) -> list[Any]:
        """Return the raw earnings-surprise array; non-arrays become ``[]``."""
        payload = await self._get_json(
            "/stock/earnings",
            endpoint="earnings",
            label="Finnhub earnings",
            params={"symbol": symbol, "limit": self._limit, "token": self._token},
        )
        return payload if isinstance(payload, list) else []

    async def profile(self, symbol: str) -> Mapping[str, Any]:
        """Return the raw profile object (empty mapping for unknown symbols)."""
        payload = await self._get_json(
            "/stock/profile2",
            endpoint="profile",
            label="Finnhub profile",
            params={"symbol": symbol, "token": self._token},
        )
        return payload if isinstance(payload, Mapping) else {}
