# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Presenter: domain errors → HTTP status and flat error body.

Synopsis:
    The only place error kinds become status codes.

    ==================  ==================  ==============================
    kind                /ticker             /analyze, /summarize
    ==================  ==================  ==============================
    config              503 (+ isDemo)      503, errorType ``config``
    data                404                 404, errorType ``data``
    transport           502 (+ hint)        500, ``gemini`` or ``unknown``
    upstream-malformed  502 (+ hint)        500, ``gemini`` or ``unknown``
    unknown             502 (+ hint)        500, ``unknown``
    ==================  ==================  ==============================

    A narrative failure is ``gemini`` when the error came from the model
    (``details["source"] == "model"``).

Layer:
    adapters/presenters
"""

from __future__ import annotations

from typing import Final

from earnings_insight.adapters.schemas.http.errors import ErrorHTTP, ErrorType
from earnings_insight.domain.exceptions.base import DomainError, ErrorKind

TICKER_ERROR_HINT: Final[str] = (
    "Check your FINNHUB_API_KEY and POLYGON_API_KEY in your environment or .env file."
)


def present_ticker_error(exc: DomainError) -> tuple[int, ErrorHTTP]:
    """Status and body for a failed ``/ticker`` request."""
    if exc.kind is ErrorKind.CONFIG:
        return 503, ErrorHTTP(error=exc.message, is_demo=True)
    if exc.kind is ErrorKind.DATA:
        return 404, ErrorHTTP(error=exc.message)
    return 502, ErrorHTTP(error=f"API error: {exc.message}", hint=TICKER_ERROR_HINT)


def narrative_error_type(exc: DomainError) -> ErrorType:
    if exc.kind is ErrorKind.CONFIG:
        return "config"
    if exc.kind is ErrorKind.DATA:
        return "data"
    if exc.details.get("source") == "model":
        return "gemini"
    return "unknown"


def present_narrative_error(exc: DomainError) -> tuple[int, ErrorHTTP]:
    """Status and body for a failed ``/analyze`` or ``/summarize`` request."""
    error_type = narrative_error_type(exc)
    status = {"config": 503, "data": 404}.get(error_type, 500)
    return status, ErrorHTTP(error=exc.message, error_type=error_type)
