from __future__ import annotations

from datetime import date

import pytest

from earnings_insight.domain.entities.market import EarningsRecord, PricePoint
from earnings_insight.domain.entities.narrative import Contradiction, NarrativeEntry, Verdict
from earnings_insight.domain.entities.reconciled_quarter import ReconciledQuarter


def test_price_point_requires_positive_close() -> None:
    with pytest.raises(ValueError):
        PricePoint(date=date(2025, 1, 2), close=0.0)


def test_earnings_record_beat_includes_equal() -> None:
    record = EarningsRecord(
        quarter="Q1 2025",
        report_date=date(2025, 1, 30),
        eps_estimate=1.0,
        eps_actual=1.0,
        surprise_percent=0.0,
    )
    assert record.is_beat


def test_earnings_record_rejects_empty_label() -> None:
    with pytest.raises(ValueError):
        EarningsRecord(
            quarter="",
            report_date=date(2025, 1, 30),
            eps_estimate=1.0,
            eps_actual=1.0,
            surprise_percent=0.0,
        )


def test_reconciled_quarter_score_bounds() -> None:
    with pytest.raises(ValueError):
        ReconciledQuarter(
            quarter="Q1",
            report_date=date(2025, 1, 30),
            eps_estimate=1.0,
            eps_actual=1.0,
            surprise_percent=0.0,
            stock_reaction_percent=0.0,
            transparency_score=101,
        )


def test_narrative_entry_requires_three_aligned_points() -> None:
    with pytest.raises(ValueError):
        NarrativeEntry(
            quarter="Q1",
            report_date=date(2025, 1, 30),
            script_points=("a", "b"),
            reality_points=("x", "y", "z"),
            verdicts=(Verdict.PARTIAL,) * 3,
            narrative_summary="",
        )


def test_contradiction_cannot_be_delivered() -> None:
    with pytest.raises(ValueError):
        Contradiction(quarter="Q1", claim="c", outcome="o", verdict=Verdict.DELIVERED)
