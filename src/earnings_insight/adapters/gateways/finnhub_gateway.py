# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Adapter Gateway: Finnhub earnings surprises and profile → domain records.

Quarter labels are ``"Q{quarter} {year}"``; the report date is the
provider's ``period``. ``surprisePercent`` is taken verbatim. Without a usable
token both lookups return ``None`` without calling the provider.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from earnings_insight.application.interfaces.market_data_gateway import EarningsGateway
from earnings_insight.domain.entities.market import CompanyProfile, EarningsRecord
from earnings_insight.domain.exceptions.market_data import MarketDataValidationError
from earnings_insight.infrastructure.external_apis.finnhub.client import FinnhubClient
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

UNKNOWN_SECTOR = "Unknown"


def _number(value: Any) -> float:
    # Finnhub sends null for quarters without a consensus.
    return 0.0 if value is None else float(value)


def _record(item: Any) -> EarningsRecord:
    if not isinstance(item, Mapping):
        raise MarketDataValidationError("Finnhub earnings entry must be an object")
    try:
        return EarningsRecord(
            quarter=f"Q{item['quarter']} {item['year']}",
            report_date=date.fromisoformat(str(item["period"])),
            eps_estimate=_number(item.get("estimate")),
            eps_actual=_number(item.get("actual")),
            surprise_percent=_number(item.get("surprisePercent")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MarketDataValidationError(
            "Finnhub earnings entry is missing fields",
            details={"error": str(exc), "entry": dict(item)},
        ) from exc


class FinnhubGateway(EarningsGateway):
    """Earnings gateway backed by :class:`FinnhubClient`."""

    def __init__(self, client: FinnhubClient) -> None:
        self._client = client

    async def fetch_earnings(self, ticker: str) -> list[EarningsRecord] | None:
        if not self._client.configured:
            logger.warning("finnhub_key_unconfigured", extra={"ticker": ticker})
            return None
        raw = await self._client.earnings(ticker)
        logger.info("finnhub_earnings_mapped", extra={"ticker": ticker, "count": len(raw)})
        if not raw:
            return None
        return [_record(item) for item in raw]

    async def fetch_company_profile(self, ticker: str) -> CompanyProfile | None:
        if not self._client.configured:
            return None
        raw = await self._client.profile(ticker)
        name = raw.get("name")
        if not name:
            return None
        return CompanyProfile(
            name=str(name),
            sector=str(raw.get("finnhubIndustry") or UNKNOWN_SECTOR),
            ticker=str(raw.get("ticker") or ticker.upper()),
        )
