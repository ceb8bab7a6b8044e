# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Narrative Controllers.

Summary:
    Thin adapters over the per-quarter analysis and the aggregate summary use
    cases.

Layer:
    adapters/controllers
"""
from __future__ import annotations

from earnings_insight.adapters.controllers.base import BaseController
from earnings_insight.adapters.presenters.narrative_presenter import NarrativePresenter
from earnings_insight.adapters.schemas.http.narrative import (
    AggregateNarrativeHTTP,
    NarrativeEntryHTTP,
)
from earnings_insight.application.use_cases.narrative.analyze_quarter import (
    AnalyzeQuarterUseCase,
)
from earnings_insight.application.use_cases.narrative.summarize_ticker import (
    SummarizeTickerUseCase,
)


class AnalyzeController(BaseController):
    __slots__ = ("_presenter", "_uc")

    def __init__(
        self, use_case: AnalyzeQuarterUseCase, presenter: NarrativePresenter | None = None
    ) -> None:
        self._uc = use_case
        self._presenter = presenter or NarrativePresenter()

    async def analyze(
        self, ticker: str, quarter: str, *, stock_reaction: float = 0.0
    ) -> NarrativeEntryHTTP:
        entry = await self._uc.execute(ticker, quarter, stock_reaction=stock_reaction)
        return self._presenter.present_entry(entry)


class SummarizeController(BaseController):
    __slots__ = ("_presenter", "_uc")

    def __init__(
        self, use_case: SummarizeTickerUseCase, presenter: NarrativePresenter | None = None
    ) -> None:
        self._uc = use_case
        self._presenter = presenter or NarrativePresenter()

    async def summarize(self, ticker: str) -> AggregateNarrativeHTTP:
        narrative = await self._uc.execute(ticker)
        return self._presenter.present_aggregate(narrative)
