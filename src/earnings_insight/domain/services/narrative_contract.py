# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Narrative Contract (Domain Service).

Synopsis:
    Validates raw language-model output against the narrative shapes.

    * Per quarter: ``{"script": [3 str], "reality": [3 str], "verdicts": [3],
      "analystTake": str}``.
    * Aggregate: ``{"bigPicture": str, "brokenPromises": [{"quarter", "promise",
      "reality", "verdict"}]}`` with at most three promises.

    Verdicts outside the allowed set are coerced to ``partial``. Anything else
    that does not fit (bad JSON, wrong counts, wrong types) raises
    :class:`NarrativeMalformed`; nothing is padded or truncated.

Layer:
    domain/services
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date
from typing import Any

from earnings_insight.domain.entities.narrative import (
    MAX_CONTRADICTIONS,
    NARRATIVE_POINTS,
    AggregateNarrative,
    Contradiction,
    NarrativeEntry,
    Verdict,
)
from earnings_insight.domain.exceptions.narrative import NarrativeMalformed

__all__ = [
    "aggregate_from_mapping",
    "aggregate_to_mapping",
    "coerce_verdict",
    "narrative_entry_from_mapping",
    "narrative_entry_to_mapping",
    "parse_aggregate_narrative",
    "parse_narrative_entry",
]


def coerce_verdict(raw: Any, *, allow_delivered: bool = True) -> Verdict:
    """Return the matching verdict, or ``partial`` for anything unrecognized."""
    try:
        verdict = Verdict(raw)
    except ValueError:
        return Verdict.PARTIAL
    if verdict is Verdict.DELIVERED and not allow_delivered:
        return Verdict.PARTIAL
    return verdict


def _load_object(text: str) -> Mapping[str, Any]:
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise NarrativeMalformed(
            "Gemini returned invalid JSON", details={"preview": str(text)[:200]}
        ) from exc
    if not isinstance(payload, Mapping):
        raise NarrativeMalformed(
            "Gemini returned a non-object JSON payload",
            details={"type": type(payload).__name__},
        )
    return payload


def _string_list(payload: Mapping[str, Any], key: str) -> list[Any]:
    value = payload.get(key)
    if not isinstance(value, list) or len(value) != NARRATIVE_POINTS:
        raise NarrativeMalformed(
            "Gemini returned malformed analysis structure",
            details={"field": key, "count": len(value) if isinstance(value, list) else None},
        )
    return value


def parse_narrative_entry(
    text: str,
    *,
    quarter: str,
    report_date: date,
    filing_url: str | None = None,
) -> NarrativeEntry:
    """Parse a per-quarter model response.

    Raises:
        NarrativeMalformed: On invalid JSON or any count/type violation.
    """
    return _entry_from_payload(
        _load_object(text), quarter=quarter, report_date=report_date, filing_url=filing_url
    )


def _entry_from_payload(
    payload: Mapping[str, Any],
    *,
    quarter: str,
    report_date: date,
    filing_url: str | None,
) -> NarrativeEntry:
    script = _string_list(payload, "script")
    reality = _string_list(payload, "reality")
    verdicts = _string_list(payload, "verdicts")
    take = payload.get("analystTake")

    if not isinstance(take, str):
        raise NarrativeMalformed(
            "Gemini returned malformed analysis structure", details={"field": "analystTake"}
        )
    if not all(isinstance(p, str) for p in (*script, *reality)):
        raise NarrativeMalformed(
            "Gemini returned non-text script or reality points",
            details={"quarter": quarter},
        )

    return NarrativeEntry(
        quarter=quarter,
        report_date=report_date,
        script_points=tuple(script),
        reality_points=tuple(reality),
        verdicts=tuple(coerce_verdict(v) for v in verdicts),
        narrative_summary=take,
        filing_url=filing_url,
    )


def _contradiction(item: Any, index: int) -> Contradiction:
    if not isinstance(item, Mapping):
        raise NarrativeMalformed(
            "Gemini returned a malformed broken promise", details={"index": index}
        )
    fields = {name: item.get(name) for name in ("quarter", "promise", "reality")}
    missing = [name for name, value in fields.items() if not isinstance(value, str)]
    if missing:
        raise NarrativeMalformed(
            "Gemini returned a malformed broken promise",
            details={"index": index, "fields": missing},
        )
    return Contradiction(
        quarter=fields["quarter"],
        claim=fields["promise"],
        outcome=fields["reality"],
        verdict=coerce_verdict(item.get("verdict"), allow_delivered=False),
    )


def parse_aggregate_narrative(text: str) -> AggregateNarrative:
    """Parse a cross-quarter model response.

    Raises:
        NarrativeMalformed: On invalid JSON, a missing summary, a non-list
            promise field, more than three promises or a malformed promise.
    """
    return _aggregate_from_payload(_load_object(text))


def _aggregate_from_payload(payload: Mapping[str, Any]) -> AggregateNarrative:
    summary = payload.get("bigPicture")
    promises = payload.get("brokenPromises", [])

    if not isinstance(summary, str):
        raise NarrativeMalformed(
            "Gemini returned malformed summary structure", details={"field": "bigPicture"}
        )
    if not isinstance(promises, list) or len(promises) > MAX_CONTRADICTIONS:
        raise NarrativeMalformed(
            "Gemini returned malformed summary structure",
            details={"field": "brokenPromises"},
        )

    return AggregateNarrative(
        overall_summary=summary,
        contradictions=tuple(_contradiction(item, i) for i, item in enumerate(promises)),
    )


# --------------------------------------------------------------------------- #
# Cache codec
# --------------------------------------------------------------------------- #


def narrative_entry_to_mapping(entry: NarrativeEntry) -> dict[str, Any]:
    """Serialize an entry in the model's own field names (JSON-safe)."""
    return {
        "quarter": entry.quarter,
        "date": entry.report_date.isoformat(),
        "script": list(entry.script_points),
        "reality": list(entry.reality_points),
        "verdicts": [v.value for v in entry.verdicts],
        "analystTake": entry.narrative_summary,
        "filingUrl": entry.filing_url,
    }


def narrative_entry_from_mapping(payload: Mapping[str, Any]) -> NarrativeEntry:
    """Rebuild an entry written by :func:`narrative_entry_to_mapping`."""
    return _entry_from_payload(
        payload,
        quarter=str(payload["quarter"]),
        report_date=date.fromisoformat(str(payload["date"])),
        filing_url=payload.get("filingUrl"),
    )


def aggregate_to_mapping(narrative: AggregateNarrative) -> dict[str, Any]:
    return {
        "bigPicture": narrative.overall_summary,
        "brokenPromises": [
            {
                "quarter": c.quarter,
                "promise": c.claim,
                "reality": c.outcome,
                "verdict": c.verdict.value,
            }
            for c in narrative.contradictions
        ],
    }


def aggregate_from_mapping(payload: Mapping[str, Any]) -> AggregateNarrative:
    return _aggregate_from_payload(payload)
