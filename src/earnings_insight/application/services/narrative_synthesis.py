# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Narrative Synthesis (Application Service).

Synopsis:
    Runs one synthesis request for a cache key, per-quarter or aggregate.

State machine:
    ``idle -> requested -> awaiting_model -> fulfilled | failed``

    * A cache hit returns the stored value and leaves the request ``idle``;
      no model call is made.
    * Exactly one model call is issued per request. There is no automatic
      retry; callers re-request, which starts a new synthesis.
    * Only fulfilled results are cached. Failures never are.
    * Concurrent requests for the same key are not deduplicated; the cache
      is last-write-wins.

Layer:
    application/services
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Final, Generic, TypeVar

from earnings_insight.application.interfaces.cache_port import CachePort
from earnings_insight.application.interfaces.narrative_model import NarrativeModelPort
from earnings_insight.domain.exceptions.base import DomainError
from earnings_insight.domain.exceptions.narrative import NarrativeMalformed
from earnings_insight.infrastructure.logging.logger import get_json_logger
from earnings_insight.infrastructure.observability.metrics import (
    cache_lookups_total,
    narrative_synthesis_total,
)

logger = get_json_logger(__name__)

T = TypeVar("T")


class SynthesisState(str, Enum):
    IDLE = "idle"
    REQUESTED = "requested"
    AWAITING_MODEL = "awaiting_model"
    FULFILLED = "fulfilled"
    FAILED = "failed"


_TRANSITIONS: Final[dict[SynthesisState, frozenset[SynthesisState]]] = {
    SynthesisState.IDLE: frozenset({SynthesisState.REQUESTED}),
    SynthesisState.REQUESTED: frozenset({SynthesisState.AWAITING_MODEL, SynthesisState.FAILED}),
    SynthesisState.AWAITING_MODEL: frozenset({SynthesisState.FULFILLED, SynthesisState.FAILED}),
    SynthesisState.FULFILLED: frozenset(),
    SynthesisState.FAILED: frozenset(),
}


class NarrativeSynthesis(Generic[T]):
    """One-shot synthesis bound to a single cache key.

    Args:
        key: Cache key, e.g. ``analysis:AAPL:Q1 2025`` or ``summary:AAPL``.
        scope: Metrics/log label, ``"quarter"`` or ``"aggregate"``.
        cache: Response cache.
        model: Language model port.
        ttl_s: TTL applied to fulfilled results.
        encode: Serializes a result for the cache.
        decode: Rebuilds a result from a cached mapping.
    """

    def __init__(
        self,
        *,
        key: str,
        scope: str,
        cache: CachePort,
        model: NarrativeModelPort,
        ttl_s: float,
        encode: Callable[[T], Mapping[str, Any]],
        decode: Callable[[Mapping[str, Any]], T],
    ) -> None:
        self.key = key
        self.scope = scope
        self._cache = cache
        self._model = model
        self._ttl_s = ttl_s
        self._encode = encode
        self._decode = decode
        self._state = SynthesisState.IDLE

    @property
    def state(self) -> SynthesisState:
        return self._state

    def _transition(self, target: SynthesisState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise RuntimeError(
                f"invalid synthesis transition {self._state.value} -> {target.value}"
            )
        logger.debug(
            "narrative_synthesis_transition",
            extra={"key": self.key, "from": self._state.value, "to": target.value},
        )
        self._state = target

    async def lookup(self) -> T | None:
        """Return the cached result for this key, if any."""
        cached = await self._cache.get_json(self.key)
        namespace = self.key.split(":", 1)[0]
        if cached is None:
            cache_lookups_total.labels(namespace=namespace, result="miss").inc()
            logger.info("cache_miss", extra={"key": self.key})
            return None
        try:
            value = self._decode(cached)
        except (DomainError, KeyError, TypeError, ValueError):
            logger.warning("cache_entry_unreadable", extra={"key": self.key})
            cache_lookups_total.labels(namespace=namespace, result="miss").inc()
            return None
        cache_lookups_total.labels(namespace=namespace, result="hit").inc()
        logger.info("cache_hit", extra={"key": self.key})
        return value

    async def run(self, prompt: str, parse: Callable[[str], T]) -> T:
        """Consult the cache, then call the model once and validate its reply.

        Args:
            prompt: Fully rendered prompt.
            parse: Validates raw model text into the result type.

        Returns:
            The cached or freshly synthesized result.

        Raises:
            DomainError: Model transport failure or malformed reply; the
                synthesis ends in ``failed``.
        """
        cached = await self.lookup()
        if cached is not None:
            return cached

        self._transition(SynthesisState.REQUESTED)
        self._transition(SynthesisState.AWAITING_MODEL)
        try:
            raw = await self._model.generate_json(prompt)
            result = parse(raw)
        except DomainError as exc:
            self._fail(exc)
            raise
        except (TypeError, ValueError) as exc:
            self._fail(exc)
            raise NarrativeMalformed(
                "Gemini returned an unusable response", details={"key": self.key}
            ) from exc

        await self._cache.set_json(self.key, self._encode(result), ttl=self._ttl_s)
        self._transition(SynthesisState.FULFILLED)
        narrative_synthesis_total.labels(scope=self.scope, state=self._state.value).inc()
        logger.info("narrative_synthesis_fulfilled", extra={"key": self.key, "scope": self.scope})
        return result

    def _fail(self, exc: Exception) -> None:
        self._transition(SynthesisState.FAILED)
        narrative_synthesis_total.labels(scope=self.scope, state=self._state.value).inc()
        logger.warning(
            "narrative_synthesis_failed",
            extra={
                "key": self.key,
                "scope": self.scope,
                "exc_type": type(exc).__name__,
                "error": str(exc),
            },
        )
