# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Structured logging."""
