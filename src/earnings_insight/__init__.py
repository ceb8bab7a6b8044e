# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Earnings Insight API.

Reconciles daily closes, quarterly earnings surprises and SEC 8-K filings into
per-quarter records, and narrates them ("script vs. reality") with Gemini.
"""

from __future__ import annotations

__version__ = "0.1.0"
