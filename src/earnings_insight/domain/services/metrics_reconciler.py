# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Metrics Reconciler (Domain Service).

Synopsis:
    Pure, total functions that turn provider data into per-quarter metrics:

    * ``compute_stock_reaction``: close-to-close move around a report date.
    * ``derive_transparency_score``: five-bucket step function of the surprise.
    * ``find_nearest_filing``: closest filing within a +/- 7 day window.
    * ``reconcile_quarters``: glue that builds ``ReconciledQuarter`` records.

Notes:
    The transparency score is a heuristic label. Nothing is fitted or
    calibrated; the thresholds are part of the public contract and must stay
    exactly as they are.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from earnings_insight.domain.entities.market import EarningsRecord, FilingRecord, PricePoint
from earnings_insight.domain.entities.reconciled_quarter import ReconciledQuarter

FILING_WINDOW_DAYS: Final[int] = 7
NEUTRAL_TRANSPARENCY: Final[int] = 50

# (lower bound inclusive, score), evaluated top-down.
_TRANSPARENCY_STEPS: Final[tuple[tuple[float, int], ...]] = (
    (5.0, 85),
    (2.0, 75),
    (0.0, 65),
    (-2.0, 45),
)
_TRANSPARENCY_FLOOR: Final[int] = 30

__all__ = [
    "FILING_WINDOW_DAYS",
    "compute_stock_reaction",
    "derive_overall_transparency",
    "derive_transparency_score",
    "find_nearest_filing",
    "reconcile_quarters",
    "round_half_away",
]


def round_half_away(value: float, places: int = 0) -> float:
    """Round ``value`` to ``places`` decimals, ties away from zero.

    Decimal is built from ``repr`` so binary noise such as ``0.1 + 0.2`` does not
    tip a tie.
    """
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def compute_stock_reaction(target: date, prices: Sequence[PricePoint]) -> float:
    """Return the percentage move around ``target``.

    Finds the first close dated on or after ``target`` and compares the close
    after it with the close before it. A match on the first or last point, or
    no match at all, yields ``0.0``.

    Args:
        target: Earnings report date.
        prices: Daily closes in ascending date order.

    Returns:
        Percentage change rounded to two decimals.
    """
    idx = next((i for i, point in enumerate(prices) if point.date >= target), None)
    if idx is None or idx <= 0 or idx >= len(prices) - 1:
        return 0.0

    before = prices[idx - 1].close
    after = prices[min(idx + 1, len(prices) - 1)].close
    basis_points = round_half_away((after - before) / before * 10000)
    return basis_points / 100


def derive_transparency_score(surprise_percent: float) -> int:
    """Map a surprise percentage to the 30..85 transparency label."""
    for lower_bound, score in _TRANSPARENCY_STEPS:
        if surprise_percent >= lower_bound:
            return score
    return _TRANSPARENCY_FLOOR


def find_nearest_filing(
    target: date,
    filings: Iterable[FilingRecord],
    *,
    window_days: int = FILING_WINDOW_DAYS,
) -> FilingRecord | None:
    """Return the filing closest to ``target`` within the window.

    Distance is in whole calendar days and the window is inclusive. On equal
    distance the earlier candidate in iteration order is kept. Candidates
    outside the window are never returned.
    """
    best: FilingRecord | None = None
    best_distance = window_days + 1
    for filing in filings:
        distance = abs((filing.filing_date - target).days)
        if distance <= window_days and distance < best_distance:
            best = filing
            best_distance = distance
    return best


def derive_overall_transparency(quarters: Sequence[ReconciledQuarter]) -> int:
    """Rounded mean of the quarter scores; neutral 50 when there are none."""
    if not quarters:
        return NEUTRAL_TRANSPARENCY
    mean = sum(q.transparency_score for q in quarters) / len(quarters)
    return int(round_half_away(mean))


def reconcile_quarters(
    records: Iterable[EarningsRecord],
    prices: Sequence[PricePoint],
    filings: Sequence[FilingRecord] | None = None,
) -> list[ReconciledQuarter]:
    """Build reconciled quarters in ascending report-date order.

    The sort is stable, so quarters sharing a report date keep provider order.
    """
    ordered = sorted(records, key=lambda r: r.report_date)
    return [
        ReconciledQuarter.from_earnings(
            record,
            stock_reaction_percent=compute_stock_reaction(record.report_date, prices),
            transparency_score=derive_transparency_score(record.surprise_percent),
            nearest_filing=(
                find_nearest_filing(record.report_date, filings) if filings else None
            ),
        )
        for record in ordered
    ]
