from __future__ import annotations

import json
from datetime import date

import pytest

from earnings_insight.domain.entities.narrative import Verdict
from earnings_insight.domain.exceptions.narrative import NarrativeMalformed
from earnings_insight.domain.services.narrative_contract import (
    aggregate_from_mapping,
    aggregate_to_mapping,
    coerce_verdict,
    narrative_entry_from_mapping,
    narrative_entry_to_mapping,
    parse_aggregate_narrative,
    parse_narrative_entry,
)

REPORTED = date(2025, 1, 30)


def _entry_payload(**overrides: object) -> str:
    payload: dict[str, object] = {
        "script": ["a", "b", "c"],
        "reality": ["x", "y", "z"],
        "verdicts": ["delivered", "partial", "missed"],
        "analystTake": "Solid quarter.",
    }
    payload.update(overrides)
    return json.dumps(payload)


def test_parse_entry_happy_path() -> None:
    entry = parse_narrative_entry(
        _entry_payload(), quarter="Q1 2025", report_date=REPORTED, filing_url="https://sec/x"
    )
    assert entry.script_points == ("a", "b", "c")
    assert entry.reality_points == ("x", "y", "z")
    assert entry.verdicts == (Verdict.DELIVERED, Verdict.PARTIAL, Verdict.MISSED)
    assert entry.narrative_summary == "Solid quarter."
    assert entry.filing_url == "https://sec/x"


def test_parse_entry_coerces_unknown_verdict_to_partial() -> None:
    entry = parse_narrative_entry(
        _entry_payload(verdicts=["delivered", "kinda", 3]),
        quarter="Q1 2025",
        report_date=REPORTED,
    )
    assert entry.verdicts == (Verdict.DELIVERED, Verdict.PARTIAL, Verdict.PARTIAL)


@pytest.mark.parametrize(
    "text",
    [
        _entry_payload(script=["only", "two"]),
        _entry_payload(reality=["1", "2", "3", "4"]),
        _entry_payload(verdicts="delivered"),
        _entry_payload(analystTake=None),
        _entry_payload(script=["a", 2, "c"]),
        "not json at all",
        "[1, 2, 3]",
    ],
    ids=[
        "two_script",
        "four_reality",
        "verdicts_not_list",
        "no_take",
        "non_text",
        "bad_json",
        "array",
    ],
)
def test_parse_entry_rejects_contract_violations(text: str) -> None:
    with pytest.raises(NarrativeMalformed) as err:
        parse_narrative_entry(text, quarter="Q1 2025", report_date=REPORTED)
    assert err.value.details["source"] == "model"


def test_parse_aggregate_happy_path_and_delivered_downgrade() -> None:
    text = json.dumps(
        {
            "bigPicture": "A year of drift.",
            "brokenPromises": [
                {"quarter": "Q3 2025", "promise": "AI", "reality": "No AI", "verdict": "missed"},
                {
                    "quarter": "Q1 2025",
                    "promise": "Demand",
                    "reality": "Flat",
                    "verdict": "delivered",
                },
            ],
        }
    )
    narrative = parse_aggregate_narrative(text)
    assert narrative.overall_summary == "A year of drift."
    assert [c.verdict for c in narrative.contradictions] == [Verdict.MISSED, Verdict.PARTIAL]
    assert narrative.contradictions[0].claim == "AI"
    assert narrative.contradictions[0].outcome == "No AI"


def test_parse_aggregate_defaults_to_no_promises() -> None:
    narrative = parse_aggregate_narrative(json.dumps({"bigPicture": "Quiet."}))
    assert narrative.contradictions == ()


@pytest.mark.parametrize(
    "payload",
    [
        {"brokenPromises": []},
        {"bigPicture": "x", "brokenPromises": "none"},
        {
            "bigPicture": "x",
            "brokenPromises": [
                {"quarter": "Q1", "promise": "p", "reality": "r", "verdict": "missed"}
            ]
            * 4,
        },
        {"bigPicture": "x", "brokenPromises": [{"quarter": "Q1", "promise": "p"}]},
        {"bigPicture": "x", "brokenPromises": ["nope"]},
    ],
    ids=["no_summary", "promises_not_list", "too_many", "missing_fields", "not_object"],
)
def test_parse_aggregate_rejects_contract_violations(payload: dict[str, object]) -> None:
    with pytest.raises(NarrativeMalformed):
        parse_aggregate_narrative(json.dumps(payload))


def test_coerce_verdict() -> None:
    assert coerce_verdict("missed") is Verdict.MISSED
    assert coerce_verdict(None) is Verdict.PARTIAL
    assert coerce_verdict("delivered", allow_delivered=False) is Verdict.PARTIAL


def test_cache_codec_restores_entries_and_aggregates() -> None:
    entry = parse_narrative_entry(
        _entry_payload(), quarter="Q1 2025", report_date=REPORTED, filing_url=None
    )
    stored = json.loads(json.dumps(narrative_entry_to_mapping(entry)))
    assert narrative_entry_from_mapping(stored) == entry

    aggregate = parse_aggregate_narrative(
        json.dumps(
            {
                "bigPicture": "x",
                "brokenPromises": [
                    {"quarter": "Q1", "promise": "p", "reality": "r", "verdict": "partial"}
                ],
            }
        )
    )
    assert aggregate_from_mapping(aggregate_to_mapping(aggregate)) == aggregate
