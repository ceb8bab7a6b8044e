# tests/unit/infrastructure/test_logger.py
from __future__ import annotations

import json
import logging

import pytest

from earnings_insight.infrastructure.logging import logger as logmod


def _record(**extra: object) -> logging.LogRecord:
    record = logging.makeLogRecord({"name": "earnings_insight.test", "levelno": 20})
    record.levelname = "INFO"
    record.msg = "cache_hit"
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_stable_keys_and_extras(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REQUEST_ID", raising=False)
    payload = json.loads(logmod._JsonFormatter().format(_record(key="summary:AAPL")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "earnings_insight.test"
    assert payload["message"] == "cache_hit"
    assert payload["key"] == "summary:AAPL"
    assert "ts" in payload


def test_formatter_prefers_record_request_id(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REQUEST_ID", "from-env")
    payload = json.loads(logmod._JsonFormatter().format(_record(request_id="rid-1")))
    assert payload["request_id"] == "rid-1"


def test_get_json_logger_propagates() -> None:
    assert logmod.get_json_logger("earnings_insight.x").propagate is True
