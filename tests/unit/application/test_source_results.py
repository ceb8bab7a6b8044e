# tests/unit/application/test_source_results.py
from __future__ import annotations

import pytest

from earnings_insight.application.services.source_results import (
    SourcePolicy,
    SourceResult,
    SourceStatus,
    gather_sources,
    resolve,
)
from earnings_insight.domain.exceptions.market_data import MarketDataUnavailable


async def _value(v: object) -> object:
    return v


async def _boom() -> None:
    raise MarketDataUnavailable("Polygon prices error (500): down")


@pytest.mark.asyncio
async def test_gather_settles_every_call() -> None:
    results = await gather_sources({"a": _value(1), "b": _value(None), "c": _boom()})
    assert results["a"].status is SourceStatus.SUCCESS and results["a"].value == 1
    assert results["b"].status is SourceStatus.ABSENT
    assert results["c"].status is SourceStatus.ERROR
    assert isinstance(results["c"].error, MarketDataUnavailable)


def test_required_failure_reraises_original_error() -> None:
    err = MarketDataUnavailable("down")
    with pytest.raises(MarketDataUnavailable) as caught:
        resolve(SourceResult.failure("prices", err), SourcePolicy.REQUIRED)
    assert caught.value is err


def test_optional_failure_becomes_none() -> None:
    result = SourceResult.failure("filings", RuntimeError("edgar down"))
    assert resolve(result, SourcePolicy.OPTIONAL) is None


def test_success_and_absent_pass_through_for_any_policy() -> None:
    for policy in SourcePolicy:
        assert resolve(SourceResult.success("x", [1]), policy) == [1]
        assert resolve(SourceResult.absent("x"), policy) is None
