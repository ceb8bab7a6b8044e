# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Application layer: ports, services and use cases."""
