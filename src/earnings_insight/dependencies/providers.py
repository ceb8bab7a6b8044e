# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Shared dependency providers: provider settings and the response cache.

Overview:
    Settings loaders are LRU-cached so each request does not re-read the
    environment; tests call :func:`reset_providers` after changing it.
    The narrative cache lives for the whole process.

Layer:
    dependencies
"""

from __future__ import annotations

from functools import lru_cache

from earnings_insight.infrastructure.caching.memory_cache import InMemoryTtlCache
from earnings_insight.infrastructure.external_apis.edgar.settings import EdgarSettings
from earnings_insight.infrastructure.external_apis.finnhub.settings import FinnhubSettings
from earnings_insight.infrastructure.external_apis.gemini.settings import GeminiSettings
from earnings_insight.infrastructure.external_apis.polygon.settings import PolygonSettings


@lru_cache(maxsize=1)
def get_polygon_settings() -> PolygonSettings:
    return PolygonSettings()


@lru_cache(maxsize=1)
def get_finnhub_settings() -> FinnhubSettings:
    return FinnhubSettings()


@lru_cache(maxsize=1)
def get_edgar_settings() -> EdgarSettings:
    return EdgarSettings()


@lru_cache(maxsize=1)
def get_gemini_settings() -> GeminiSettings:
    return GeminiSettings()


@lru_cache(maxsize=1)
def get_narrative_cache() -> InMemoryTtlCache:
    """Return the process-wide narrative cache."""
    return InMemoryTtlCache()


def reset_providers() -> None:
    """Drop cached settings and the narrative cache (tests only)."""
    from earnings_insight.config.settings import get_settings

    for loader in (
        get_settings,
        get_polygon_settings,
        get_finnhub_settings,
        get_edgar_settings,
        get_gemini_settings,
        get_narrative_cache,
    ):
        loader.cache_clear()
