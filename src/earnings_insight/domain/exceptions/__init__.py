# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Domain exception hierarchy."""

from __future__ import annotations

from .base import ConfigurationError, DataUnavailableError, DomainError, ErrorKind
from .edgar import EdgarError, EdgarMappingError, EdgarNotFound
from .market_data import (
    EarningsDataUnavailable,
    MarketDataUnavailable,
    MarketDataValidationError,
    QuarterNotFound,
)
from .narrative import NarrativeMalformed, NarrativeModelError, NarrativeModelUnavailable

__all__ = [
    "ConfigurationError",
    "DataUnavailableError",
    "DomainError",
    "EarningsDataUnavailable",
    "EdgarError",
    "EdgarMappingError",
    "EdgarNotFound",
    "ErrorKind",
    "MarketDataUnavailable",
    "MarketDataValidationError",
    "NarrativeMalformed",
    "NarrativeModelError",
    "NarrativeModelUnavailable",
    "QuarterNotFound",
]
