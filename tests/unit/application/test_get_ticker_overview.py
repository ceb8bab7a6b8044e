# tests/unit/application/test_get_ticker_overview.py
from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from typing import Any

import pytest

from earnings_insight.adapters.gateways.demo_catalog import StaticDemoCatalog
from earnings_insight.application.use_cases.ticker.get_ticker_overview import (
    GetTickerOverviewUseCase,
)
from earnings_insight.domain.entities.market import CompanyProfile
from earnings_insight.domain.exceptions.base import ConfigurationError, DataUnavailableError
from earnings_insight.domain.exceptions.edgar import EdgarError
from earnings_insight.domain.exceptions.market_data import (
    EarningsDataUnavailable,
    MarketDataUnavailable,
)


def _uc(
    fx: SimpleNamespace,
    *,
    prices: Any = None,
    earnings: Any = None,
    filings: Any = None,
    live: bool = True,
) -> GetTickerOverviewUseCase:
    return GetTickerOverviewUseCase(
        prices=prices if prices is not None else fx.FakePrices(),
        earnings=earnings if earnings is not None else fx.FakeEarnings(),
        filings=filings if filings is not None else fx.FakeFilings(),
        demo=StaticDemoCatalog(),
        live_sources_configured=live,
    )


def _live_inputs(fx: SimpleNamespace) -> tuple[Any, Any]:
    prices = fx.FakePrices(fx.prices(date(2025, 1, 1), [100.0 + i for i in range(60)]))
    earnings = fx.FakeEarnings(
        [
            fx.record("Q2 2025", date(2025, 2, 10), surprise=-3.0),
            fx.record("Q1 2025", date(2025, 1, 15), surprise=6.0),
        ],
        CompanyProfile(name="Acme Corp", sector="Widgets", ticker="ACME"),
    )
    return prices, earnings


@pytest.mark.asyncio
async def test_unconfigured_serves_demo_for_bundled_ticker(fx: SimpleNamespace) -> None:
    prices = fx.FakePrices()
    snapshot = await _uc(fx, prices=prices, live=False).execute(" aapl ")
    assert snapshot.is_demo
    assert snapshot.ticker == "AAPL"
    assert snapshot.overall_transparency_score == 67
    assert prices.calls == []


@pytest.mark.asyncio
async def test_unconfigured_unknown_ticker_is_configuration_error(fx: SimpleNamespace) -> None:
    with pytest.raises(ConfigurationError):
        await _uc(fx, live=False).execute("ZZZZ")


@pytest.mark.asyncio
async def test_live_snapshot_is_reconciled(fx: SimpleNamespace) -> None:
    prices, earnings = _live_inputs(fx)
    filings = fx.FakeFilings([fx.filing(date(2025, 1, 16))])
    snapshot = await _uc(fx, prices=prices, earnings=earnings, filings=filings).execute("acme")

    assert not snapshot.is_demo
    assert (snapshot.ticker, snapshot.company_name, snapshot.sector) == (
        "ACME",
        "Acme Corp",
        "Widgets",
    )
    assert [q.quarter for q in snapshot.quarters] == ["Q1 2025", "Q2 2025"]
    assert [q.transparency_score for q in snapshot.quarters] == [85, 30]
    assert snapshot.overall_transparency_score == 58
    assert snapshot.quarters[0].nearest_filing == filings.filings[0]
    assert snapshot.quarters[1].nearest_filing is None
    assert len(snapshot.narratives) == 2
    assert snapshot.narratives[0].filing_url == filings.filings[0].document_url
    assert snapshot.filings == tuple(filings.filings)
    assert filings.limits == [4]


@pytest.mark.asyncio
async def test_optional_failures_are_downgraded(fx: SimpleNamespace) -> None:
    prices, _ = _live_inputs(fx)
    earnings = fx.FakeEarnings(
        [fx.record("Q1 2025", date(2025, 1, 15))],
        profile_error=EarningsDataUnavailable("Finnhub profile error (500): down"),
    )
    filings = fx.FakeFilings(error=EdgarError("EDGAR error (503): busy"))

    snapshot = await _uc(fx, prices=prices, earnings=earnings, filings=filings).execute("acme")

    assert snapshot.company_name == "ACME"
    assert snapshot.sector == "Unknown"
    assert snapshot.filings is None
    assert snapshot.quarters[0].nearest_filing is None


@pytest.mark.asyncio
async def test_required_failure_propagates(fx: SimpleNamespace) -> None:
    _, earnings = _live_inputs(fx)
    prices = fx.FakePrices(error=MarketDataUnavailable("Polygon prices error (500): down"))
    with pytest.raises(MarketDataUnavailable):
        await _uc(fx, prices=prices, earnings=earnings).execute("ACME")


@pytest.mark.asyncio
async def test_missing_data_falls_back_to_demo(fx: SimpleNamespace) -> None:
    _, earnings = _live_inputs(fx)
    snapshot = await _uc(fx, prices=fx.FakePrices([]), earnings=earnings).execute("AAPL")
    assert snapshot.is_demo


@pytest.mark.asyncio
async def test_missing_data_without_demo_is_data_error(fx: SimpleNamespace) -> None:
    prices, _ = _live_inputs(fx)
    with pytest.raises(DataUnavailableError) as err:
        await _uc(fx, prices=prices, earnings=fx.FakeEarnings(None)).execute("Nvidia")
    assert 'No earnings data found for "NVIDIA"' in err.value.message
