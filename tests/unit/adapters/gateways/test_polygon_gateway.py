# tests/unit/adapters/gateways/test_polygon_gateway.py
from __future__ import annotations

from datetime import UTC, date, datetime

import httpx
import pytest
import respx

from earnings_insight.adapters.gateways.polygon_gateway import PolygonGateway, one_year_before
from earnings_insight.domain.exceptions.market_data import MarketDataValidationError
from earnings_insight.infrastructure.external_apis.polygon.client import PolygonClient
from earnings_insight.infrastructure.external_apis.polygon.settings import PolygonSettings

AGGS_URL = "https://api.polygon.io/v2/aggs/ticker/AAPL/range/1/day/2024-10-19/2025-10-19"


def _ms(day: date) -> int:
    return int(datetime(day.year, day.month, day.day, 4, tzinfo=UTC).timestamp() * 1000)


def _gateway(http: httpx.AsyncClient) -> PolygonGateway:
    client = PolygonClient(PolygonSettings(api_key="k"), http=http)  # type: ignore[arg-type]
    return PolygonGateway(client, today=lambda: date(2025, 10, 19))


def test_one_year_before_handles_leap_day() -> None:
    assert one_year_before(date(2025, 10, 19)) == date(2024, 10, 19)
    assert one_year_before(date(2024, 2, 29)) == date(2023, 2, 28)


@pytest.mark.asyncio
async def test_bars_map_to_points_and_incomplete_bars_are_skipped() -> None:
    results = [
        {"t": _ms(date(2025, 10, 16)), "c": 247.451},
        {"t": _ms(date(2025, 10, 17)), "o": 248.0},
        {"c": 250.0},
        {"t": _ms(date(2025, 10, 17)), "c": 252.29},
    ]
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(AGGS_URL).mock(
                return_value=httpx.Response(200, json={"status": "OK", "results": results})
            )
            points = await _gateway(http).fetch_daily_closes("AAPL")

    assert points is not None
    assert [(p.date, p.close) for p in points] == [
        (date(2025, 10, 16), 247.45),
        (date(2025, 10, 17), 252.29),
    ]


@pytest.mark.asyncio
async def test_no_results_is_absent() -> None:
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(AGGS_URL).mock(
                return_value=httpx.Response(200, json={"status": "OK", "resultsCount": 0})
            )
            assert await _gateway(http).fetch_daily_closes("AAPL") is None


@pytest.mark.asyncio
async def test_results_of_wrong_type_are_rejected() -> None:
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(AGGS_URL).mock(
                return_value=httpx.Response(200, json={"results": {"t": 1, "c": 2}})
            )
            with pytest.raises(MarketDataValidationError):
                await _gateway(http).fetch_daily_closes("AAPL")


@pytest.mark.asyncio
async def test_unconfigured_key_skips_the_request() -> None:
    async with httpx.AsyncClient() as http:
        with respx.mock:
            route = respx.get(AGGS_URL).mock(return_value=httpx.Response(401))
            settings = PolygonSettings(api_key="your_key_here")  # type: ignore[arg-type]
            client = PolygonClient(settings, http=http)
            points = await PolygonGateway(client).fetch_daily_closes("AAPL")

    assert points is None
    assert not route.called
