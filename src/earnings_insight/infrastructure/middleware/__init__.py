# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""ASGI middleware (request correlation, access logging)."""
