# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""FastAPI dependency providers."""
