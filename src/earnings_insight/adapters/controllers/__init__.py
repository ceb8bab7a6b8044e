# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Controllers coordinating use cases and presenters."""
