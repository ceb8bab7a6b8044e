# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator, Sequence
from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from earnings_insight.dependencies.providers import reset_providers
from earnings_insight.domain.entities.market import (
    CompanyProfile,
    EarningsRecord,
    FilingRecord,
    PricePoint,
)

_PROVIDER_ENV = (
    "POLYGON_API_KEY",
    "FINNHUB_API_KEY",
    "GEMINI_API_KEY",
    "SEC_USER_AGENT",
    "NARRATIVE_CACHE_TTL_S",
    "EDGAR_ANALYZE_FILINGS_LIMIT",
    "ALLOWED_ORIGINS",
)


@pytest.fixture(autouse=True)
def _hermetic_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Start every test with no provider credentials and fresh cached providers."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_providers()
    yield
    reset_providers()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_prices(start: date, closes: Sequence[float]) -> list[PricePoint]:
    return [PricePoint(date=start + timedelta(days=i), close=c) for i, c in enumerate(closes)]


def make_record(
    quarter: str,
    reported: date,
    *,
    estimate: float = 1.0,
    actual: float = 1.1,
    surprise: float = 10.0,
) -> EarningsRecord:
    return EarningsRecord(
        quarter=quarter,
        report_date=reported,
        eps_estimate=estimate,
        eps_actual=actual,
        surprise_percent=surprise,
    )


def make_filing(filed: date, *, accession: str = "0000320193-25-000001") -> FilingRecord:
    return FilingRecord(
        filing_date=filed,
        form="8-K",
        description=f"Results filed {filed.isoformat()}",
        document_url=f"https://www.sec.gov/Archives/edgar/data/320193/{filed:%Y%m%d}/doc.htm",
        accession_id=accession,
    )


# ---------------------------------------------------------------------------
# Fake ports
# ---------------------------------------------------------------------------


class FakePrices:
    def __init__(
        self, points: list[PricePoint] | None = None, error: Exception | None = None
    ) -> None:
        self.points = points
        self.error = error
        self.calls: list[str] = []

    async def fetch_daily_closes(self, ticker: str) -> list[PricePoint] | None:
        self.calls.append(ticker)
        if self.error is not None:
            raise self.error
        return self.points


class FakeEarnings:
    def __init__(
        self,
        records: list[EarningsRecord] | None = None,
        profile: CompanyProfile | None = None,
        *,
        error: Exception | None = None,
        profile_error: Exception | None = None,
    ) -> None:
        self.records = records
        self.profile = profile
        self.error = error
        self.profile_error = profile_error
        self.calls: list[str] = []

    async def fetch_earnings(self, ticker: str) -> list[EarningsRecord] | None:
        self.calls.append(ticker)
        if self.error is not None:
            raise self.error
        return self.records

    async def fetch_company_profile(self, ticker: str) -> CompanyProfile | None:
        if self.profile_error is not None:
            raise self.profile_error
        return self.profile


class FakeFilings:
    def __init__(
        self, filings: list[FilingRecord] | None = None, error: Exception | None = None
    ) -> None:
        self.filings = filings
        self.error = error
        self.limits: list[int] = []

    async def fetch_recent_filings(
        self, ticker: str, *, limit: int = 4
    ) -> list[FilingRecord] | None:
        self.limits.append(limit)
        if self.error is not None:
            raise self.error
        return self.filings


class FakeModel:
    """Returns queued replies in order; an Exception in the queue is raised."""

    def __init__(self, *replies: str | Exception) -> None:
        self.replies = list(replies)
        self.prompts: list[str] = []

    async def generate_json(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fx() -> SimpleNamespace:
    """Builders and fake ports, shared without importing conftest."""
    return SimpleNamespace(
        prices=make_prices,
        record=make_record,
        filing=make_filing,
        FakePrices=FakePrices,
        FakeEarnings=FakeEarnings,
        FakeFilings=FakeFilings,
        FakeModel=FakeModel,
        FakeClock=FakeClock,
    )
