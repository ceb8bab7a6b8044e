# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Application Interface: Cache Port.

Synopsis:
    Minimal JSON cache used by the narrative use cases. Injected so handlers
    can be tested with a fake clock or a fake store.

Layer:
    application/interfaces
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class CachePort(Protocol):
    """JSON cache with per-entry TTL semantics.

    ``set_json`` overwrites unconditionally; last write wins. Implementations
    treat a TTL ``<= 0`` as "do not cache".
    """

    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        """Get a JSON-serializable value by key.

        Args:
            key: Cache key (already namespaced, e.g. ``summary:AAPL``).

        Returns:
            The stored mapping if present and not expired, else ``None``.
        """

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: float) -> None:
        """Set a JSON-serializable value with TTL.

        Args:
            key: Cache key.
            value: JSON-serializable mapping.
            ttl: Time-to-live in seconds.
        """
