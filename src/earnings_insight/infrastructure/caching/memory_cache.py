# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""In-memory TTL cache (process lifetime).

Synopsis:
    ``CachePort`` implementation backed by a dict of ``(expires_at, value)``.
    Expired entries are evicted lazily on read. There is no size bound and no
    LRU policy; the key space is limited to the ticker/quarter pairs actually
    requested.

Concurrency:
    Each operation holds a ``threading.Lock`` for one dict access, so the cache
    can be shared by requests running on different event loops (uvicorn
    workers with threads, test clients). No cross-key transactions.
"""

from __future__ import annotations

import copy
import threading
import time
from collections.abc import Callable, Mapping
from typing import Any

from earnings_insight.application.interfaces.cache_port import CachePort
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

Clock = Callable[[], float]

DEFAULT_TTL_S: float = 3600.0


class InMemoryTtlCache(CachePort):
    """Small, thread-safe in-memory JSON cache with per-entry TTL.

    Args:
        clock: Monotonic clock returning seconds. Tests inject a fake one.
    """

    def __init__(self, *, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._store: dict[str, tuple[float, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        """Return the stored mapping if present and unexpired; evict it otherwise."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._store[key]
                logger.debug("cache_evicted", extra={"key": key})
                return None
            return copy.deepcopy(value)

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: float) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds (overwrites)."""
        if ttl <= 0:
            return
        snapshot = copy.deepcopy(dict(value))
        with self._lock:
            self._store[key] = (self._clock() + float(ttl), snapshot)

    def __contains__(self, key: object) -> bool:
        """Membership on the raw store, without expiry checks."""
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
