from __future__ import annotations

from datetime import date

import pytest

from earnings_insight.domain.entities.market import FilingRecord
from earnings_insight.domain.entities.narrative import GuidanceAccuracy, TrendDirection, Verdict
from earnings_insight.domain.entities.reconciled_quarter import ReconciledQuarter
from earnings_insight.domain.services.summary_builder import (
    build_master_summary,
    build_placeholder_narratives,
    build_yearly_summary,
)


def _q(
    label: str,
    *,
    estimate: float,
    actual: float,
    surprise: float,
    reaction: float = 0.0,
    score: int = 65,
    filing: FilingRecord | None = None,
) -> ReconciledQuarter:
    return ReconciledQuarter(
        quarter=label,
        report_date=date(2025, 1, 30),
        eps_estimate=estimate,
        eps_actual=actual,
        surprise_percent=surprise,
        stock_reaction_percent=reaction,
        transparency_score=score,
        nearest_filing=filing,
    )


def _year() -> list[ReconciledQuarter]:
    return [
        _q("Q1 2025", estimate=2.35, actual=2.4, surprise=2.1, score=78),
        _q("Q2 2025", estimate=1.61, actual=1.65, surprise=2.5, score=82),
        _q("Q3 2025", estimate=1.35, actual=1.4, surprise=3.7, score=65),
        _q("Q4 2025", estimate=1.88, actual=1.82, surprise=-3.2, score=42),
    ]


def test_master_summary_counts_and_trend() -> None:
    summary = build_master_summary(_year(), "Apple Inc.")

    assert (summary.beat_count, summary.miss_count) == (3, 1)
    assert summary.avg_surprise == 1.28
    assert summary.transparency_trend == "Growing Evasiveness"
    assert summary.transparency_trend_direction is TrendDirection.DOWN
    assert summary.revenue_trend is TrendDirection.DOWN
    assert summary.guidance_accuracy is GuidanceAccuracy.ACCURATE
    assert summary.broken_promises == ()
    assert "Apple Inc." in summary.big_picture
    assert "3 times" in summary.big_picture and "1 time." in summary.big_picture


def test_master_summary_improving_trend() -> None:
    quarters = [
        _q("Q1", estimate=1.0, actual=0.9, surprise=-10.0, score=30),
        _q("Q2", estimate=1.0, actual=1.2, surprise=20.0, score=85),
    ]
    summary = build_master_summary(quarters, "Acme")
    assert summary.transparency_trend == "Improving Transparency"
    assert summary.transparency_trend_direction is TrendDirection.UP
    assert summary.revenue_trend is TrendDirection.UP


def test_master_summary_single_and_empty_are_flat() -> None:
    one = build_master_summary([_q("Q1", estimate=1.0, actual=1.0, surprise=0.0)], "Acme")
    assert one.transparency_trend == "Holding Steady"
    assert one.transparency_trend_direction is TrendDirection.FLAT
    assert one.revenue_trend is TrendDirection.FLAT

    none = build_master_summary([], "Acme")
    assert (none.beat_count, none.miss_count, none.avg_surprise) == (0, 0, 0.0)
    assert none.transparency_trend_direction is TrendDirection.FLAT


def test_master_summary_small_score_change_holds_steady() -> None:
    quarters = [
        _q("Q1", estimate=1.0, actual=1.0, surprise=0.0, score=65),
        _q("Q2", estimate=1.0, actual=1.0, surprise=0.0, score=65),
        _q("Q3", estimate=1.0, actual=1.0, surprise=0.0, score=65),
        _q("Q4", estimate=1.0, actual=1.0, surprise=0.0, score=70),
    ]
    assert build_master_summary(quarters, "Acme").transparency_trend == "Holding Steady"


@pytest.mark.parametrize(
    ("surprise", "label"),
    [
        (2.5, GuidanceAccuracy.CONSERVATIVE),
        (2.0, GuidanceAccuracy.ACCURATE),
        (-1.0, GuidanceAccuracy.ACCURATE),
        (-1.5, GuidanceAccuracy.OPTIMISTIC),
    ],
)
def test_guidance_accuracy_bands(surprise: float, label: GuidanceAccuracy) -> None:
    quarters = [_q("Q1", estimate=1.0, actual=1.0, surprise=surprise)]
    assert build_master_summary(quarters, "Acme").guidance_accuracy is label


def test_yearly_summary_is_fixed_for_live_data() -> None:
    yearly = build_yearly_summary(_year(), "Apple Inc.")
    assert (yearly.beat_count, yearly.miss_count, yearly.avg_surprise) == (3, 1, 1.28)
    assert yearly.revenue_trend is TrendDirection.FLAT
    assert yearly.guidance_accuracy is GuidanceAccuracy.ACCURATE
    assert yearly.overall_sentiment == "Apple Inc. reported 4 quarters of earnings data."
    single = build_yearly_summary(_year()[:1], "Acme")
    assert single.overall_sentiment == "Acme reported 1 quarter of earnings data."


@pytest.mark.parametrize(
    ("actual", "reaction", "verdicts"),
    [
        (1.1, 1.0, (Verdict.DELIVERED, Verdict.DELIVERED, Verdict.PARTIAL)),
        (1.1, -5.0, (Verdict.DELIVERED, Verdict.DELIVERED, Verdict.PARTIAL)),
        (0.9, -5.0, (Verdict.MISSED, Verdict.MISSED, Verdict.PARTIAL)),
        (0.9, -3.0, (Verdict.MISSED, Verdict.PARTIAL, Verdict.PARTIAL)),
        (0.9, 4.0, (Verdict.MISSED, Verdict.MISSED, Verdict.PARTIAL)),
    ],
    ids=["beat", "beat_big_drop", "miss_big_drop", "miss_small_move", "miss_big_rally"],
)
def test_placeholder_verdicts(
    actual: float, reaction: float, verdicts: tuple[Verdict, ...]
) -> None:
    quarter = _q("Q1 2025", estimate=1.0, actual=actual, surprise=0.0, reaction=reaction)
    (entry,) = build_placeholder_narratives([quarter])
    assert entry.verdicts == verdicts
    assert len(entry.script_points) == len(entry.reality_points) == 3


def test_placeholder_links_nearest_filing() -> None:
    filing = FilingRecord(
        filing_date=date(2025, 1, 30),
        form="8-K",
        description="Results",
        document_url="https://www.sec.gov/Archives/edgar/data/1/2/doc.htm",
        accession_id="0000000001-25-000002",
    )
    with_filing = _q("Q1", estimate=1.0, actual=1.0, surprise=0.0, filing=filing)
    without = _q("Q2", estimate=1.0, actual=1.0, surprise=0.0)
    entries = build_placeholder_narratives([with_filing, without])
    assert [e.filing_url for e in entries] == [filing.document_url, None]
    assert [e.quarter for e in entries] == ["Q1", "Q2"]
