# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Market and Earnings Data Exceptions

Purpose:
    Errors raised by the price and earnings providers. Mapped to HTTP by
    adapters.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError, ErrorKind


class MarketDataUnavailable(DomainError):
    """Provider could not be reached, timed out or answered non-2xx."""

    code = "MARKET_DATA_UNAVAILABLE"
    kind = ErrorKind.TRANSPORT


class MarketDataValidationError(DomainError):
    """Provider returned an unexpected/invalid payload."""

    code = "UPSTREAM_SCHEMA_ERROR"
    kind = ErrorKind.UPSTREAM_MALFORMED


class EarningsDataUnavailable(MarketDataUnavailable):
    code = "EARNINGS_DATA_UNAVAILABLE"


class QuarterNotFound(DomainError):
    """The requested quarter label is not among the provider's quarters."""

    code = "QUARTER_NOT_FOUND"
    kind = ErrorKind.DATA
