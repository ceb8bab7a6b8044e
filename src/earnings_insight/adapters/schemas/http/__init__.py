# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""HTTP schemas (camelCase wire models)."""

from earnings_insight.adapters.schemas.http.base import BaseHTTPSchema
from earnings_insight.adapters.schemas.http.errors import ErrorHTTP, ErrorType
from earnings_insight.adapters.schemas.http.narrative import (
    AggregateNarrativeHTTP,
    BrokenPromiseHTTP,
    NarrativeEntryHTTP,
)
from earnings_insight.adapters.schemas.http.ticker import (
    EarningsQuarterHTTP,
    FilingHTTP,
    MasterSummaryHTTP,
    PricePointHTTP,
    TickerOverviewHTTP,
    YearlySummaryHTTP,
)

__all__ = [
    "AggregateNarrativeHTTP",
    "BaseHTTPSchema",
    "BrokenPromiseHTTP",
    "EarningsQuarterHTTP",
    "ErrorHTTP",
    "ErrorType",
    "FilingHTTP",
    "MasterSummaryHTTP",
    "NarrativeEntryHTTP",
    "PricePointHTTP",
    "TickerOverviewHTTP",
    "YearlySummaryHTTP",
]
