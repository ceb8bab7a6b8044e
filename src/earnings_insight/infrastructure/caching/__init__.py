# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Cache implementations of ``CachePort``."""
