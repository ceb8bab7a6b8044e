# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Ports implemented by adapters and infrastructure."""

from __future__ import annotations

from .cache_port import CachePort
from .demo_catalog import DemoCatalog
from .market_data_gateway import EarningsGateway, FilingsGateway, PriceSeriesGateway
from .narrative_model import NarrativeModelPort

__all__ = [
    "CachePort",
    "DemoCatalog",
    "EarningsGateway",
    "FilingsGateway",
    "NarrativeModelPort",
    "PriceSeriesGateway",
]
