# tests/unit/application/test_analyze_quarter.py
from __future__ import annotations

import json
from datetime import date
from types import SimpleNamespace
from typing import Any

import pytest

from earnings_insight.application.use_cases.narrative.analyze_quarter import (
    AnalyzeQuarterUseCase,
    analysis_cache_key,
)
from earnings_insight.domain.entities.market import CompanyProfile
from earnings_insight.domain.entities.narrative import Verdict
from earnings_insight.domain.exceptions.base import ConfigurationError, DataUnavailableError
from earnings_insight.domain.exceptions.market_data import QuarterNotFound
from earnings_insight.domain.exceptions.narrative import NarrativeMalformed
from earnings_insight.infrastructure.caching.memory_cache import InMemoryTtlCache

REPLY = json.dumps(
    {
        "script": ["s1", "s2", "s3"],
        "reality": ["r1", "r2", "r3"],
        "verdicts": ["delivered", "missed", "unsure"],
        "analystTake": "Fine quarter.",
    }
)


def _earnings(fx: SimpleNamespace) -> Any:
    return fx.FakeEarnings(
        [
            fx.record("Q4 2024", date(2024, 10, 31)),
            fx.record("Q1 2025", date(2025, 1, 30), estimate=2.35, actual=2.4, surprise=2.1),
        ],
        CompanyProfile(name="Apple Inc.", sector="Technology", ticker="AAPL"),
    )


def _uc(
    fx: SimpleNamespace,
    *,
    model: Any,
    earnings: Any = None,
    filings: Any = None,
    cache: InMemoryTtlCache | None = None,
    configured: bool = True,
) -> AnalyzeQuarterUseCase:
    return AnalyzeQuarterUseCase(
        earnings=earnings if earnings is not None else _earnings(fx),
        filings=filings if filings is not None else fx.FakeFilings(),
        model=model,
        cache=cache if cache is not None else InMemoryTtlCache(),
        model_configured=configured,
        cache_ttl_s=3600,
    )


@pytest.mark.asyncio
async def test_missing_model_key_is_configuration_error(fx: SimpleNamespace) -> None:
    earnings = _earnings(fx)
    with pytest.raises(ConfigurationError):
        await _uc(fx, model=fx.FakeModel(), earnings=earnings, configured=False).execute(
            "AAPL", "Q1 2025"
        )
    assert earnings.calls == []


@pytest.mark.asyncio
async def test_analysis_uses_nearest_filing_and_caches(fx: SimpleNamespace) -> None:
    cache = InMemoryTtlCache()
    model = fx.FakeModel(REPLY)
    filing = fx.filing(date(2025, 1, 31))
    filings = fx.FakeFilings([fx.filing(date(2025, 3, 1), accession="far"), filing])

    entry = await _uc(fx, model=model, filings=filings, cache=cache).execute(
        "aapl", "Q1 2025", stock_reaction=1.8
    )

    assert entry.quarter == "Q1 2025"
    assert entry.report_date == date(2025, 1, 30)
    assert entry.verdicts == (Verdict.DELIVERED, Verdict.MISSED, Verdict.PARTIAL)
    assert entry.filing_url == filing.document_url
    assert filings.limits == [10]
    (prompt,) = model.prompts
    assert "Apple Inc. (AAPL)" in prompt
    assert "Stock Reaction: +1.8% next day" in prompt
    assert filing.description in prompt
    assert analysis_cache_key("aapl", "Q1 2025") == "analysis:AAPL:Q1 2025"
    assert "analysis:AAPL:Q1 2025" in cache


@pytest.mark.asyncio
async def test_second_request_is_served_from_cache(fx: SimpleNamespace) -> None:
    cache = InMemoryTtlCache()
    model = fx.FakeModel(REPLY)
    first = await _uc(fx, model=model, cache=cache).execute("AAPL", "Q1 2025")
    second = await _uc(fx, model=model, cache=cache).execute(
        "AAPL", "Q1 2025", stock_reaction=-4.0
    )
    assert first == second
    assert len(model.prompts) == 1


@pytest.mark.asyncio
async def test_unknown_quarter_lists_available_labels(fx: SimpleNamespace) -> None:
    with pytest.raises(QuarterNotFound) as err:
        await _uc(fx, model=fx.FakeModel()).execute("AAPL", "Q9 2030")
    assert err.value.message == 'No data for "Q9 2030". Available: Q4 2024, Q1 2025'


@pytest.mark.asyncio
async def test_no_earnings_is_data_error(fx: SimpleNamespace) -> None:
    with pytest.raises(DataUnavailableError):
        await _uc(fx, model=fx.FakeModel(), earnings=fx.FakeEarnings([])).execute(
            "AAPL", "Q1 2025"
        )


@pytest.mark.asyncio
async def test_malformed_reply_is_not_cached(fx: SimpleNamespace) -> None:
    cache = InMemoryTtlCache()
    with pytest.raises(NarrativeMalformed):
        await _uc(fx, model=fx.FakeModel('{"script": []}'), cache=cache).execute(
            "AAPL", "Q1 2025"
        )
    assert len(cache) == 0
