# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Base Controller.

Summary:
    Canonical base for adapter controllers. Controllers are thin coordinators
    between a use case and a presenter and never perform I/O themselves.

Layer:
    adapters/controllers
"""
from __future__ import annotations


class BaseController:
    """Marker base for adapter controllers."""

    __slots__ = ()
