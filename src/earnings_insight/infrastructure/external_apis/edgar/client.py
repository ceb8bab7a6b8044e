# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""EDGAR Transport Client.

Endpoints:
    * ``company_tickers``: ``{www}/files/company_tickers.json`` (ticker map).
    * ``browse_company``: ``{www}/cgi-bin/browse-edgar`` atom feed, used to
      resolve a CIK when the ticker map has no entry.
    * ``submissions``: ``{data}/submissions/CIK##########.json``.

Notes:
    SEC requires a descriptive ``User-Agent``; an unconfigured one falls back
    to a generic identifier with a warning at construction time.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

import httpx

from earnings_insight.domain.exceptions.edgar import EdgarError, EdgarMappingError, EdgarNotFound
from earnings_insight.infrastructure.external_apis.base_client import JsonHttpClient
from earnings_insight.infrastructure.external_apis.edgar.settings import EdgarSettings
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

_CIK_IN_FEED: Final = re.compile(r"CIK=(\d+)")


def _normalize_cik(cik: str | int) -> str:
    """Return a 10-digit, zero-padded CIK string.

    Raises:
        EdgarMappingError: If ``cik`` has no digits or more than ten.
    """
    digits = "".join(ch for ch in str(cik) if ch.isdigit())
    if not digits or len(digits) > 10:
        raise EdgarMappingError("Invalid CIK", details={"cik": str(cik)})
    return digits.zfill(10)


class EdgarClient(JsonHttpClient):
    """Async client for the SEC EDGAR endpoints used to locate 8-K filings."""

    provider = "edgar"
    display_name = "EDGAR"
    unavailable_error = EdgarError
    malformed_error = EdgarMappingError
    not_found_error = EdgarNotFound

    def __init__(
        self,
        settings: EdgarSettings,
        *,
        http: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ) -> None:
        if not settings.user_agent_configured:
            logger.warning(
                "edgar_user_agent_unconfigured",
                extra={"fallback": settings.resolved_user_agent()},
            )
        super().__init__(
            base_url=settings.data_base_url,
            timeout_s=timeout_s if timeout_s is not None else settings.timeout_s,
            http=http,
            headers={"User-Agent": settings.resolved_user_agent()},
        )
        self._www = settings.www_base_url.rstrip("/")

    @property
    def archives_base_url(self) -> str:
        return f"{self._www}/Archives/edgar/data"

    async def company_tickers(self) -> Mapping[str, Any]:
        """Return the SEC ticker map (``{"0": {"cik_str", "ticker", "title"}, ...}``)."""
        payload = await self._get_json(
            f"{self._www}/files/company_tickers.json",
            endpoint="company_tickers",
            label="EDGAR ticker map",
        )
        if not isinstance(payload, Mapping):
            raise EdgarMappingError(
                "EDGAR ticker map must be an object", details={"type": type(payload).__name__}
            )
        return payload

    async def browse_company_cik(self, ticker: str) -> str | None:
        """Resolve a CIK from the browse-edgar atom feed, or ``None`` if absent."""
        response = await self._request(
            "GET",
            f"{self._www}/cgi-bin/browse-edgar",
            endpoint="browse_company",
            label="EDGAR browse",
            params={
                "action": "getcompany",
                "CIK": ticker,
                "type": "8-K",
                "dateb": "",
                "owner": "include",
                "count": "1",
                "output": "atom",
            },
        )
        match = _CIK_IN_FEED.search(response.text)
        return match.group(1) if match else None

    async def submissions(self, cik: str | int) -> Mapping[str, Any]:
        """Return the submissions document for ``cik``."""
        cik10 = _normalize_cik(cik)
        payload = await self._get_json(
            f"/submissions/CIK{cik10}.json",
            endpoint="submissions",
            label="EDGAR submissions",
        )
        if not isinstance(payload, Mapping):
            raise EdgarMappingError(
                "EDGAR submissions must be an object", details={"cik": cik10}
            )
        return payload
