# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Structured JSON logging utilities.

An idempotent root configurator and a per-module logger factory producing one
JSON object per line.

Features:
    * Stable keys: ``ts``, ``level``, ``logger``, ``message``.
    * ``request_id`` and ``trace_id`` pulled from contextvars set by the
      request-id middleware, falling back to record attributes and the
      ``REQUEST_ID`` environment variable.
    * ``extra={...}`` keys are merged into the payload.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
    log.info("cache_hit", extra={"key": "summary:AAPL"})
"""

from __future__ import annotations

import json
import logging
import os
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, Final

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "get_request_id",
    "get_trace_id",
    "set_request_context",
]

_REQUEST_ID_ENV_KEY: Final[str] = "REQUEST_ID"

_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("ei_request_id", default=None)
_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("ei_trace_id", default=None)

# LogRecord attributes that are not caller-supplied extras.
_RESERVED: Final[frozenset[str]] = frozenset(
    vars(logging.makeLogRecord({})).keys() | {"message", "asctime", "taskName"}
)


def set_request_context(*, request_id: str | None = None, trace_id: str | None = None) -> None:
    """Set per-request correlation identifiers on the current context.

    Only the arguments that are not ``None`` are updated.
    """
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if trace_id is not None:
        _TRACE_ID_CTX.set(trace_id)


def get_request_id() -> str | None:
    """Return the current request id from contextvars, if any."""
    return _REQUEST_ID_CTX.get(None)


def get_trace_id() -> str | None:
    """Return the current trace id from contextvars, if any."""
    return _TRACE_ID_CTX.get(None)


class _JsonFormatter(logging.Formatter):
    """JSON log formatter emitting stable keys plus caller extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = (
            getattr(record, "request_id", None)
            or _REQUEST_ID_CTX.get(None)
            or os.getenv(_REQUEST_ID_ENV_KEY)
        )
        if rid:
            payload["request_id"] = rid

        tid = getattr(record, "trace_id", None) or _TRACE_ID_CTX.get(None)
        if tid:
            payload["trace_id"] = tid

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)

        # logging.Logger copies ``extra`` keys onto the record itself.
        for key, value in vars(record).items():
            if key in _RESERVED or key in payload or key in ("request_id", "trace_id"):
                continue
            payload[key] = value

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def configure_root_logging(level: str | int | None = None) -> None:
    """Install a JSON stream handler on the root logger (idempotent).

    Args:
        level: Level or level name. Defaults to env ``LOG_LEVEL`` or ``INFO``.
    """
    root = logging.getLogger()

    env_level = os.getenv("LOG_LEVEL")
    resolved: int | str = (
        level if level is not None else (env_level.upper() if env_level else "INFO")
    )
    root.setLevel(resolved)

    if root.handlers:
        # Already configured; avoid duplicate handlers on reload.
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return a module logger that propagates to the JSON root handler.

    Does not configure the root logger; call :func:`configure_root_logging`
    once at startup.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
