# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Bundled demo snapshots.

Synopsis:
    A curated AAPL dataset served (flagged ``is_demo``) when live sources are
    unconfigured or return too little data. Quarters, narratives and summaries
    are hand-written; prices are generated from a seeded random walk so every
    process serves the same series.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from datetime import date, timedelta
from functools import lru_cache
from typing import Final

from earnings_insight.application.interfaces.demo_catalog import DemoCatalog
from earnings_insight.domain.entities.market import PricePoint
from earnings_insight.domain.entities.narrative import (
    Contradiction,
    GuidanceAccuracy,
    MasterSummary,
    NarrativeEntry,
    TrendDirection,
    Verdict,
    YearlySummary,
)
from earnings_insight.domain.entities.reconciled_quarter import ReconciledQuarter
from earnings_insight.domain.entities.ticker_snapshot import TickerSnapshot
from earnings_insight.domain.services.metrics_reconciler import round_half_away

PRICE_SEED: Final[int] = 20250102

D, P, M = Verdict.DELIVERED, Verdict.PARTIAL, Verdict.MISSED


def generate_daily_prices(
    start: date,
    start_price: float,
    days: int,
    reactions: Mapping[date, float],
    *,
    seed: int = PRICE_SEED,
) -> list[PricePoint]:
    """Random-walk weekday closes with fixed moves on earnings days.

    Args:
        start: First calendar day considered.
        start_price: Price before the first move.
        days: Calendar days to walk (weekends are skipped, not counted out).
        reactions: Percent move applied on each listed date instead of noise.
        seed: Seed for the private ``random.Random``.
    """
    rng = random.Random(seed)
    price = start_price
    points: list[PricePoint] = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        if day.weekday() >= 5:
            continue
        if day in reactions:
            price *= 1 + reactions[day] / 100
        else:
            # slight upward drift
            price *= 1 + (rng.random() - 0.48) * 2.5 / 100
        points.append(PricePoint(date=day, close=round_half_away(price, 2)))
    return points


def _quarter(
    label: str,
    reported: date,
    estimate: float,
    actual: float,
    surprise: float,
    revenue: tuple[float, float],
    reaction: float,
    score: int,
) -> ReconciledQuarter:
    return ReconciledQuarter(
        quarter=label,
        report_date=reported,
        eps_estimate=estimate,
        eps_actual=actual,
        surprise_percent=surprise,
        stock_reaction_percent=reaction,
        transparency_score=score,
        revenue_estimate=revenue[0],
        revenue_actual=revenue[1],
    )


_AAPL_QUARTERS: Final = (
    _quarter("Q1 2025", date(2025, 1, 30), 2.35, 2.4, 2.1, (124.1, 124.3), 1.8, 78),
    _quarter("Q2 2025", date(2025, 5, 1), 1.61, 1.65, 2.5, (94.5, 95.4), 3.2, 82),
    _quarter("Q3 2025", date(2025, 7, 31), 1.35, 1.4, 3.7, (85.2, 85.8), -2.1, 65),
    _quarter("Q4 2025", date(2025, 10, 30), 1.88, 1.82, -3.2, (89.3, 87.1), -5.4, 42),
)

_AAPL_NARRATIVES: Final = (
    NarrativeEntry(
        quarter="Q1 2025",
        report_date=date(2025, 1, 30),
        script_points=(
            "Services keeps setting all-time revenue records, proof of how strong the "
            "ecosystem is.",
            "Demand for iPhone 16 is strong in every market.",
            "Apple Intelligence will drive growth for years.",
        ),
        reality_points=(
            "Services grew 14% to a real record, carried by more than a billion paid "
            "subscriptions.",
            "iPhone revenue was about flat year over year; slower upgrades in China sat "
            "behind the 'strong demand' line.",
            "Apple Intelligence shipped to lukewarm reviews and the bigger Siri upgrade "
            "slipped to a later release.",
        ),
        verdicts=(D, P, P),
        narrative_summary=(
            "The services engine is the real story this quarter: subscriptions, the App "
            "Store and iCloud all set records. The iPhone talk deserves more skepticism. "
            "Flat revenue means people are holding on to their phones longer, especially "
            "in China. The AI pitch is still mostly a promise, and even loyal users found "
            "the first release thin. A decent quarter described in slightly rosy terms."
        ),
    ),
    NarrativeEntry(
        quarter="Q2 2025",
        report_date=date(2025, 5, 1),
        script_points=(
            "Greater China is recovering and the outlook there is good.",
            "The M4 lineup pushed iPad and Mac to strong double-digit growth.",
            "Momentum should continue across every product category.",
        ),
        reality_points=(
            "China grew 3%, a recovery on paper that trails India's growth of more than "
            "20% by a wide margin.",
            "iPad jumped 21% and Mac 16%; the M4 refresh really did drive upgrades.",
            "Wearables fell for a third quarter in a row, which undercuts the "
            "'every category' claim.",
        ),
        verdicts=(P, D, M),
        narrative_summary=(
            "Apple presented a mixed quarter as a clean sweep. iPad and Mac earned their "
            "applause because the M4 chips gave buyers a reason to upgrade. Calling 3% "
            "growth in China a recovery is generous when India is where the growth is. "
            "The weakest claim was momentum in every category while Wearables shrank for "
            "the third straight quarter. That detail only shows up if you read past the "
            "headline."
        ),
    ),
    NarrativeEntry(
        quarter="Q3 2025",
        report_date=date(2025, 7, 31),
        script_points=(
            "Heavy AI infrastructure spending will set Apple apart this holiday season.",
            "Wider gross margins show operating efficiency and premium pricing power.",
            "Developers are adopting Apple Intelligence APIs faster than expected.",
        ),
        reality_points=(
            "AI infrastructure spending rose 40%, yet no specific holiday product was "
            "announced.",
            "Gross margin reached 46.3%, a genuine multi-year high.",
            "Only 12% of the top App Store apps used the Apple Intelligence APIs at the "
            "time of the call.",
        ),
        verdicts=(P, D, M),
        narrative_summary=(
            "The spending is real: a 40% jump in AI infrastructure is serious money. "
            "Promising holiday differentiation without naming a product is a hope rather "
            "than a plan. Margins were the bright spot, with 46.3% putting Apple near the "
            "top of its own history. The developer claim is the one to question, since "
            "'faster than expected' sits awkwardly next to 12% adoption among top apps."
        ),
    ),
    NarrativeEntry(
        quarter="Q4 2025",
        report_date=date(2025, 10, 30),
        script_points=(
            "The iPhone 16 cycle is tracking our expectations.",
            "Vision Pro and spatial computing are a significant long-term opportunity.",
            "Our capital return program is still the largest in corporate history.",
        ),
        reality_points=(
            "iPhone revenue came in $1.8B under estimates; 'our expectations' were not "
            "Wall Street's.",
            "Supply chain reports put Vision Pro production cuts at 50%, and most store "
            "demos were pulled.",
            "The buyback is real: $25B went back to shareholders in the quarter.",
        ),
        verdicts=(M, M, D),
        narrative_summary=(
            "Trust took a hit this quarter. 'In line with our expectations' is a bar you "
            "set yourself, and the iPhone still missed the Street by nearly $2 billion. "
            "Talking up Vision Pro while suppliers halve orders and stores drop the demos "
            "reads as denial. The buyback figure is the one fully accurate statement. One "
            "honest claim out of three does not make a transparent call."
        ),
    ),
)

_AAPL_MASTER: Final = MasterSummary(
    big_picture=(
        "Apple beat estimates through the first three quarters of 2025 on the strength "
        "of services and the M4 refresh, then the story turned in Q4. The iPhone 16 cycle "
        "fell short of Wall Street, China stayed sluggish and Vision Pro slid from "
        "headline product to open question. Management language also grew vaguer over the "
        "year: early calls were specific and backed by numbers, while by Q4 the phrases "
        "were 'in line with expectations' and 'long-term opportunity'. Services remains "
        "the dependable, plainly communicated part of the business. Read the rest with "
        "care."
    ),
    transparency_trend="Growing Evasiveness",
    transparency_trend_direction=TrendDirection.DOWN,
    beat_count=3,
    miss_count=1,
    avg_surprise=1.28,
    revenue_trend=TrendDirection.UP,
    guidance_accuracy=GuidanceAccuracy.CONSERVATIVE,
    broken_promises=(
        Contradiction(
            quarter="Q3 2025",
            claim=(
                "AI would set Apple apart by the holiday season, and developer adoption was "
                "running ahead of expectations."
            ),
            outcome=(
                "No major AI product shipped for the holidays, only 12% of top apps adopted "
                "the APIs, and the holiday quarter closed with an iPhone revenue miss."
            ),
            verdict=M,
        ),
        Contradiction(
            quarter="Q1 2025",
            claim="Demand for iPhone 16 was described as strong across all markets.",
            outcome=(
                "iPhone revenue was flat in Q1 and weakened through the year, ending in a "
                "$1.8B miss in Q4."
            ),
            verdict=P,
        ),
    ),
)

_AAPL_YEARLY: Final = YearlySummary(
    beat_count=3,
    miss_count=1,
    avg_surprise=1.28,
    revenue_trend=TrendDirection.UP,
    guidance_accuracy=GuidanceAccuracy.CONSERVATIVE,
    overall_sentiment=(
        "Apple beat expectations in 3 of 4 quarters this year. The Q4 miss ended a long "
        "streak and raised questions about iPhone demand, while services remains a "
        "reliable growth engine."
    ),
)


@lru_cache(maxsize=1)
def _aapl_snapshot() -> TickerSnapshot:
    prices = generate_daily_prices(
        date(2025, 1, 2),
        243.5,
        365,
        {q.report_date: q.stock_reaction_percent for q in _AAPL_QUARTERS},
    )
    return TickerSnapshot(
        ticker="AAPL",
        company_name="Apple Inc.",
        sector="Technology",
        overall_transparency_score=67,
        prices=tuple(prices),
        quarters=_AAPL_QUARTERS,
        narratives=_AAPL_NARRATIVES,
        master_summary=_AAPL_MASTER,
        yearly_summary=_AAPL_YEARLY,
        is_demo=True,
    )


class StaticDemoCatalog(DemoCatalog):
    """Demo catalog over the bundled snapshots."""

    _builders: Final = {"AAPL": _aapl_snapshot}

    def get(self, ticker: str) -> TickerSnapshot | None:
        builder = self._builders.get(ticker.strip().upper())
        return builder() if builder else None

    def tickers(self) -> list[str]:
        return sorted(self._builders)
