# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Pure domain services (no I/O)."""
