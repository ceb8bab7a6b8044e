# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Gateways mapping provider payloads into domain records."""
