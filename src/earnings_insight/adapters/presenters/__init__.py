# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Presenters rendering domain results into HTTP schemas."""
