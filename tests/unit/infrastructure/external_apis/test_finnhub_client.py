# tests/unit/infrastructure/external_apis/test_finnhub_client.py
from __future__ import annotations

import httpx
import pytest
import respx

from earnings_insight.domain.exceptions.market_data import EarningsDataUnavailable
from earnings_insight.infrastructure.external_apis.finnhub.client import FinnhubClient
from earnings_insight.infrastructure.external_apis.finnhub.settings import FinnhubSettings

BASE = "https://finnhub.io/api/v1"


@pytest.mark.asyncio
async def test_earnings_sends_symbol_limit_and_token() -> None:
    cfg = FinnhubSettings(api_key="tok")  # type: ignore[arg-type]
    async with httpx.AsyncClient() as http:
        client = FinnhubClient(cfg, http=http)
        with respx.mock:
            route = respx.get(f"{BASE}/stock/earnings").mock(
                return_value=httpx.Response(200, json=[{"quarter": 1, "year": 2025}])
            )
            rows = await client.earnings("AAPL")

    assert rows == [{"quarter": 1, "year": 2025}]
    params = route.calls.last.request.url.params
    assert (params["symbol"], params["limit"], params["token"]) == ("AAPL", "4", "tok")


@pytest.mark.asyncio
async def test_unexpected_shapes_become_empty() -> None:
    cfg = FinnhubSettings(api_key="tok")  # type: ignore[arg-type]
    async with httpx.AsyncClient() as http:
        client = FinnhubClient(cfg, http=http)
        with respx.mock:
            respx.get(f"{BASE}/stock/earnings").mock(
                return_value=httpx.Response(200, json={"error": "x"})
            )
            respx.get(f"{BASE}/stock/profile2").mock(return_value=httpx.Response(200, json=[]))
            assert await client.earnings("ZZZZ") == []
            assert await client.profile("ZZZZ") == {}


@pytest.mark.asyncio
async def test_rate_limit_is_reported_not_retried() -> None:
    cfg = FinnhubSettings(api_key="tok")  # type: ignore[arg-type]
    async with httpx.AsyncClient() as http:
        client = FinnhubClient(cfg, http=http)
        with respx.mock:
            route = respx.get(f"{BASE}/stock/earnings").mock(
                return_value=httpx.Response(429, text="API limit reached")
            )
            with pytest.raises(EarningsDataUnavailable, match=r"\(429\)"):
                await client.earnings("AAPL")

    assert route.call_count == 1
