# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""HTTP-level infrastructure (exception handlers)."""
