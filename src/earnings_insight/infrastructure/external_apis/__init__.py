# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Transport clients for external providers (Polygon, Finnhub, EDGAR, Gemini)."""
