# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Base Entity (Domain Layer).

Purpose:
    Mixin for immutable domain records. Subclasses are frozen dataclasses that
    check their invariants in ``__post_init__``.

Layer:
    domain/entities
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BaseEntity:
    """Base mixin for domain entities.

    ``BaseEntity`` declares no fields. It fixes the dataclass configuration
    (frozen + slots) and gives subclasses a common invariant hook.
    """

    def __post_init__(self) -> None:
        """Hook for subclasses to extend with invariant checks."""
        return
