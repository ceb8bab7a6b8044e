# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""HTTP routers."""
