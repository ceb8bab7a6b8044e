# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Source Results (Application Service).

Synopsis:
    Explicit outcome type for one call to an external source plus the
    combinator that applies the per-source policy.

    * ``SourceResult``: success / absent / error for one call.
    * ``gather_sources``: runs named calls concurrently; every call settles.
    * ``resolve``: required sources re-raise their error, optional sources
      downgrade it to ``None`` with a warning log and a metric.

Layer:
    application/services
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from earnings_insight.infrastructure.logging.logger import get_json_logger
from earnings_insight.infrastructure.observability.metrics import (
    optional_source_downgrades_total,
)

logger = get_json_logger(__name__)

T = TypeVar("T")

__all__ = [
    "SourcePolicy",
    "SourceResult",
    "SourceStatus",
    "capture",
    "gather_sources",
    "resolve",
]


class SourceStatus(str, Enum):
    SUCCESS = "success"
    ABSENT = "absent"
    ERROR = "error"


class SourcePolicy(str, Enum):
    """How a failure of a source is treated by :func:`resolve`."""

    REQUIRED = "required"
    OPTIONAL = "optional"


@dataclass(frozen=True, slots=True)
class SourceResult(Generic[T]):
    """Outcome of a single call to an external source.

    Attributes:
        name: Logical source name (``"prices"``, ``"filings"``, ...).
        status: Settled state of the call.
        value: Returned value when ``status`` is ``SUCCESS``.
        error: Raised exception when ``status`` is ``ERROR``.
    """

    name: str
    status: SourceStatus
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, name: str, value: T) -> SourceResult[T]:
        return cls(name=name, status=SourceStatus.SUCCESS, value=value)

    @classmethod
    def absent(cls, name: str) -> SourceResult[T]:
        return cls(name=name, status=SourceStatus.ABSENT)

    @classmethod
    def failure(cls, name: str, error: Exception) -> SourceResult[T]:
        return cls(name=name, status=SourceStatus.ERROR, error=error)


async def capture(name: str, call: Awaitable[T | None]) -> SourceResult[T]:
    """Await ``call`` and record its outcome instead of raising."""
    try:
        value = await call
    except Exception as exc:
        return SourceResult.failure(name, exc)
    if value is None:
        return SourceResult.absent(name)
    return SourceResult.success(name, value)


async def gather_sources(calls: Mapping[str, Awaitable[Any]]) -> dict[str, SourceResult[Any]]:
    """Run the named calls concurrently and wait until every one settles."""
    names = list(calls)
    results = await asyncio.gather(*(capture(name, calls[name]) for name in names))
    return dict(zip(names, results, strict=True))


def resolve(result: SourceResult[T], policy: SourcePolicy) -> T | None:
    """Apply ``policy`` to ``result``.

    Returns:
        The value on success, ``None`` when absent or when an optional source
        failed.

    Raises:
        Exception: The captured error of a failed required source.
    """
    if result.status is not SourceStatus.ERROR:
        return result.value

    assert result.error is not None
    if policy is SourcePolicy.REQUIRED:
        raise result.error

    logger.warning(
        "optional_source_failed",
        extra={
            "source": result.name,
            "exc_type": type(result.error).__name__,
            "error": str(result.error),
        },
    )
    optional_source_downgrades_total.labels(source=result.name).inc()
    return None
