# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Adapters layer: gateways, presenters, controllers, routers and HTTP schemas."""
