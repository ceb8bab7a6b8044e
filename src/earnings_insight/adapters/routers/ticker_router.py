# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Ticker Router.

Summary:
    ``GET /ticker/{ticker}``: reconciled prices, earnings, filings and summary
    stubs for one ticker, or the bundled demo snapshot.

Layer:
    adapters/routers
"""
from __future__ import annotations

from typing import Annotated, Any, cast

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from earnings_insight.adapters.controllers.ticker_controller import TickerController
from earnings_insight.adapters.presenters.error_presenter import present_ticker_error
from earnings_insight.adapters.schemas.http.errors import ErrorHTTP
from earnings_insight.adapters.schemas.http.ticker import TickerOverviewHTTP
from earnings_insight.application.use_cases.ticker.get_ticker_overview import (
    GetTickerOverviewUseCase,
)
from earnings_insight.dependencies.market_data import get_ticker_overview_uc
from earnings_insight.domain.exceptions.base import DomainError
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)
router = APIRouter(prefix="/ticker", tags=["Ticker"])

_ERROR_RESPONSES = cast(
    "dict[int | str, dict[str, Any]]",
    {code: {"model": ErrorHTTP} for code in (404, 502, 503)},
)


@router.get(
    "/{ticker}",
    response_model=TickerOverviewHTTP,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    summary="Get the reconciled earnings overview for a ticker",
)
async def get_ticker(
    ticker: Annotated[str, Path(min_length=1, max_length=12, examples=["AAPL"])],
    uc: Annotated[GetTickerOverviewUseCase, Depends(get_ticker_overview_uc)],
) -> TickerOverviewHTTP | JSONResponse:
    """Return the ticker overview, or a flat ``{error}`` body on failure."""
    try:
        return await TickerController(uc).overview(ticker)
    except DomainError as exc:
        status_code, body = present_ticker_error(exc)
        logger.warning(
            "ticker_request_failed",
            extra={
                "ticker": ticker.upper(),
                "code": exc.code,
                "kind": exc.kind.value,
                "status": status_code,
            },
        )
        return JSONResponse(
            status_code=status_code, content=body.model_dump_http(exclude_none=True)
        )
