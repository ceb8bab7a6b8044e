# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Infrastructure: provider transports, caching, logging, middleware, metrics."""
