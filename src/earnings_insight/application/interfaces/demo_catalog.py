# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Application Interface: Demo Catalog.

Bundled snapshots served, flagged ``is_demo``, when live sources are
unconfigured or return too little data.
"""

from __future__ import annotations

from typing import Protocol

from earnings_insight.domain.entities.ticker_snapshot import TickerSnapshot


class DemoCatalog(Protocol):
    def get(self, ticker: str) -> TickerSnapshot | None:
        """Return the demo snapshot for ``ticker`` (case-insensitive), if bundled."""

    def tickers(self) -> list[str]:
        """List the bundled tickers."""
