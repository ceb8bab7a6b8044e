# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Application services shared by the use cases."""
