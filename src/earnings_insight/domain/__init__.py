# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Domain layer: entities, exceptions and pure services."""
