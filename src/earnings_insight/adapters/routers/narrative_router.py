# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Narrative Router.

Summary:
    ``GET /analyze/{ticker}/{quarter}`` (one script-vs-reality entry) and
    ``GET /summarize/{ticker}`` (big picture plus broken promises). Failures
    return ``{error, errorType}``.

Layer:
    adapters/routers
"""
from __future__ import annotations

from typing import Annotated, Any, cast

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse

from earnings_insight.adapters.controllers.narrative_controller import (
    AnalyzeController,
    SummarizeController,
)
from earnings_insight.adapters.presenters.error_presenter import present_narrative_error
from earnings_insight.adapters.schemas.http.errors import ErrorHTTP
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
from earnings_insight.dependencies.narrative import (
    get_analyze_quarter_uc,
    get_summarize_ticker_uc,
)
from earnings_insight.domain.exceptions.base import DomainError
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)
router = APIRouter(tags=["Narratives"])

_ERROR_RESPONSES = cast(
    "dict[int | str, dict[str, Any]]",
    {code: {"model": ErrorHTTP} for code in (404, 500, 503)},
)

TickerPath = Annotated[str, Path(min_length=1, max_length=12, examples=["AAPL"])]


def _error_response(exc: DomainError, *, route: str, ticker: str) -> JSONResponse:
    status_code, body = present_narrative_error(exc)
    logger.warning(
        "narrative_request_failed",
        extra={
            "route": route,
            "ticker": ticker.upper(),
            "code": exc.code,
            "kind": exc.kind.value,
            "error_type": body.error_type,
            "status": status_code,
        },
    )
    return JSONResponse(status_code=status_code, content=body.model_dump_http(exclude_none=True))


@router.get(
    "/analyze/{ticker}/{quarter}",
    response_model=NarrativeEntryHTTP,
    responses=_ERROR_RESPONSES,
    summary="Script vs. reality for one quarter",
)
async def analyze_quarter(
    ticker: TickerPath,
    quarter: Annotated[str, Path(min_length=1, examples=["Q1 2025"])],
    uc: Annotated[AnalyzeQuarterUseCase, Depends(get_analyze_quarter_uc)],
    stock_reaction: Annotated[
        float,
        Query(alias="stockReaction", description="Reaction percent shown on the dashboard."),
    ] = 0.0,
) -> NarrativeEntryHTTP | JSONResponse:
    try:
        return await AnalyzeController(uc).analyze(
            ticker, quarter, stock_reaction=stock_reaction
        )
    except DomainError as exc:
        return _error_response(exc, route="analyze", ticker=ticker)


@router.get(
    "/summarize/{ticker}",
    response_model=AggregateNarrativeHTTP,
    responses=_ERROR_RESPONSES,
    summary="Cross-quarter big picture and broken promises",
)
async def summarize_ticker(
    ticker: TickerPath,
    uc: Annotated[SummarizeTickerUseCase, Depends(get_summarize_ticker_uc)],
) -> AggregateNarrativeHTTP | JSONResponse:
    try:
        return await SummarizeController(uc).summarize(ticker)
    except DomainError as exc:
        return _error_response(exc, route="summarize", ticker=ticker)
