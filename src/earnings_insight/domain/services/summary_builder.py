# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Summary Builder (Domain Service).

Synopsis:
    Deterministic stand-ins shipped with every live ticker snapshot before a
    model is asked for anything: one placeholder ``NarrativeEntry`` per quarter,
    the ``MasterSummary`` statistics block and the legacy ``YearlySummary``.

Layer:
    domain/services
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Final

from earnings_insight.domain.entities.narrative import (
    GuidanceAccuracy,
    MasterSummary,
    NarrativeEntry,
    TrendDirection,
    Verdict,
    YearlySummary,
)
from earnings_insight.domain.entities.reconciled_quarter import ReconciledQuarter
from earnings_insight.domain.services.metrics_reconciler import round_half_away

BIG_MOVE_PERCENT: Final[float] = 3.0
TREND_BAND: Final[float] = 5.0

__all__ = [
    "build_master_summary",
    "build_placeholder_narratives",
    "build_yearly_summary",
]


def _average_surprise(quarters: Sequence[ReconciledQuarter]) -> float:
    if not quarters:
        return 0.0
    return sum(q.surprise_percent for q in quarters) / len(quarters)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _transparency_trend(scores: Sequence[int]) -> tuple[str, TrendDirection]:
    split = math.ceil(len(scores) / 2)
    head, tail = scores[:split], scores[split:]
    if not head or not tail:
        return "Holding Steady", TrendDirection.FLAT

    head_avg = sum(head) / len(head)
    tail_avg = sum(tail) / len(tail)
    if tail_avg > head_avg + TREND_BAND:
        return "Improving Transparency", TrendDirection.UP
    if tail_avg < head_avg - TREND_BAND:
        return "Growing Evasiveness", TrendDirection.DOWN
    return "Holding Steady", TrendDirection.FLAT


def _eps_trend(quarters: Sequence[ReconciledQuarter]) -> TrendDirection:
    if len(quarters) < 2:
        return TrendDirection.FLAT
    first, last = quarters[0].eps_actual, quarters[-1].eps_actual
    if last > first:
        return TrendDirection.UP
    if last < first:
        return TrendDirection.DOWN
    return TrendDirection.FLAT


def _guidance_accuracy(avg_surprise: float) -> GuidanceAccuracy:
    if avg_surprise > 2:
        return GuidanceAccuracy.CONSERVATIVE
    if avg_surprise >= -1:
        return GuidanceAccuracy.ACCURATE
    return GuidanceAccuracy.OPTIMISTIC


def build_master_summary(
    quarters: Sequence[ReconciledQuarter], company_name: str
) -> MasterSummary:
    """Summarize beats, misses and the score trend across ``quarters``.

    Args:
        quarters: Reconciled quarters in ascending report-date order.
        company_name: Display name used in the narrative stub.

    Returns:
        A ``MasterSummary`` with an empty broken-promise list.
    """
    beat_count = sum(1 for q in quarters if q.is_beat)
    miss_count = len(quarters) - beat_count
    avg_surprise = _average_surprise(quarters)
    trend_label, trend_direction = _transparency_trend([q.transparency_score for q in quarters])

    if beat_count > miss_count:
        reading = (
            "That pattern points to a company that sets conservative expectations, "
            "which usually reflects well on its transparency."
        )
    else:
        reading = (
            "With beats and misses this mixed, it is worth reading management commentary "
            "closely for signs that guidance is drifting."
        )
    big_picture = (
        f"Across the last {len(quarters)} quarters, {company_name} beat earnings estimates "
        f"{_plural(beat_count, 'time')} and missed {_plural(miss_count, 'time')}. "
        f"The average surprise was {avg_surprise:+.1f}%. {reading} "
        "A model-written review of the earnings calls is available on request."
    )

    return MasterSummary(
        big_picture=big_picture,
        transparency_trend=trend_label,
        transparency_trend_direction=trend_direction,
        beat_count=beat_count,
        miss_count=miss_count,
        avg_surprise=round_half_away(avg_surprise, 2),
        revenue_trend=_eps_trend(quarters),
        guidance_accuracy=_guidance_accuracy(avg_surprise),
    )


def build_yearly_summary(
    quarters: Sequence[ReconciledQuarter], company_name: str
) -> YearlySummary:
    """Legacy summary block; trend and accuracy are fixed for live data."""
    beat_count = sum(1 for q in quarters if q.is_beat)
    return YearlySummary(
        beat_count=beat_count,
        miss_count=len(quarters) - beat_count,
        avg_surprise=round_half_away(_average_surprise(quarters), 2),
        revenue_trend=TrendDirection.FLAT,
        guidance_accuracy=GuidanceAccuracy.ACCURATE,
        overall_sentiment=(
            f"{company_name} reported {_plural(len(quarters), 'quarter')} of earnings data."
        ),
    )


def _placeholder_entry(q: ReconciledQuarter) -> NarrativeEntry:
    beat = q.is_beat
    reaction = q.stock_reaction_percent
    big_move = abs(reaction) > BIG_MOVE_PERCENT
    direction = "up" if reaction > 0 else "down"
    size = "a significant" if big_move else "a muted"

    script = (
        f"Management walked through {q.quarter} results on the earnings call.",
        (
            "The company pointed to areas of strength and positive momentum."
            if beat
            else "The company acknowledged headwinds while stressing its long-term strategy."
        ),
        "Guidance was given for the upcoming quarter.",
    )
    if beat:
        eps_line = (
            f"EPS came in at ${q.eps_actual:.2f}, beating the ${q.eps_estimate:.2f} "
            f"estimate by {q.surprise_percent:.1f}%."
        )
    else:
        eps_line = (
            f"EPS came in at ${q.eps_actual:.2f}, missing the ${q.eps_estimate:.2f} "
            f"estimate by {abs(q.surprise_percent):.1f}%."
        )
    reality = (
        eps_line,
        f"The stock moved {direction} {abs(reaction):.1f}% the next day, {size} reaction.",
        "A full transcript review becomes available once the model analysis is requested.",
    )

    if big_move and not beat:
        second = Verdict.MISSED
    elif beat:
        second = Verdict.DELIVERED
    else:
        second = Verdict.PARTIAL
    verdicts = (Verdict.DELIVERED if beat else Verdict.MISSED, second, Verdict.PARTIAL)

    if beat:
        market = (
            "reacted positively"
            if reaction >= 0
            else "still slipped afterward, so the beat may have been priced in "
            "or guidance disappointed"
        )
        take = (
            f"{q.quarter} was a solid quarter. Earnings beat Wall Street's estimate by "
            f"{q.surprise_percent:.1f}%, which hints that management set the bar "
            f"conservatively. The stock {market}. Ask for the full analysis to compare "
            "what management said with what the numbers show."
        )
    else:
        market = f"dropped {abs(reaction):.1f}%" if reaction < 0 else "held fairly steady"
        take = (
            f"{q.quarter} was a rough one. Earnings missed the estimate by "
            f"{abs(q.surprise_percent):.1f}% and the stock {market} in response. After a "
            "miss the key question is whether management saw it coming. Ask for the full "
            "analysis to see whether the tone of the call hinted at trouble."
        )

    return NarrativeEntry(
        quarter=q.quarter,
        report_date=q.report_date,
        script_points=script,
        reality_points=reality,
        verdicts=verdicts,
        narrative_summary=take,
        filing_url=q.nearest_filing.document_url if q.nearest_filing else None,
    )


def build_placeholder_narratives(
    quarters: Sequence[ReconciledQuarter],
) -> list[NarrativeEntry]:
    """One number-driven placeholder entry per quarter, same order as input."""
    return [_placeholder_entry(q) for q in quarters]
