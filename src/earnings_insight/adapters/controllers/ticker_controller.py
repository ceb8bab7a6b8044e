# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Ticker Controller.

Summary:
    Runs the ticker overview use case and renders the snapshot.

Layer:
    adapters/controllers
"""
from __future__ import annotations

from earnings_insight.adapters.controllers.base import BaseController
from earnings_insight.adapters.presenters.ticker_presenter import TickerPresenter
from earnings_insight.adapters.schemas.http.ticker import TickerOverviewHTTP
from earnings_insight.application.use_cases.ticker.get_ticker_overview import (
    GetTickerOverviewUseCase,
)


class TickerController(BaseController):
    """Controller orchestrating the ticker overview."""

    __slots__ = ("_presenter", "_uc")

    def __init__(
        self, use_case: GetTickerOverviewUseCase, presenter: TickerPresenter | None = None
    ) -> None:
        self._uc = use_case
        self._presenter = presenter or TickerPresenter()

    async def overview(self, ticker: str) -> TickerOverviewHTTP:
        """Return the rendered overview for ``ticker``.

        Raises:
            DomainError: Propagated from the use case for the router to map.
        """
        snapshot = await self._uc.execute(ticker)
        return self._presenter.present(snapshot)
