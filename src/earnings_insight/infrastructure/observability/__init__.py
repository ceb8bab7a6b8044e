# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Observability helpers (Prometheus metrics)."""
