# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Presenter: TickerSnapshot → ``TickerOverviewHTTP``.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from earnings_insight.adapters.presenters.narrative_presenter import (
    present_broken_promise,
    present_narrative_entry,
)
from earnings_insight.adapters.schemas.http.ticker import (
    EarningsQuarterHTTP,
    FilingHTTP,
    MasterSummaryHTTP,
    PricePointHTTP,
    TickerOverviewHTTP,
    YearlySummaryHTTP,
)
from earnings_insight.domain.entities.market import FilingRecord
from earnings_insight.domain.entities.narrative import MasterSummary, YearlySummary
from earnings_insight.domain.entities.reconciled_quarter import ReconciledQuarter
from earnings_insight.domain.entities.ticker_snapshot import TickerSnapshot


def _quarter(q: ReconciledQuarter) -> EarningsQuarterHTTP:
    return EarningsQuarterHTTP(
        quarter=q.quarter,
        date=q.report_date,
        eps_estimate=q.eps_estimate,
        eps_actual=q.eps_actual,
        surprise_percent=q.surprise_percent,
        revenue_estimate=q.revenue_estimate,
        revenue_actual=q.revenue_actual,
        stock_reaction=q.stock_reaction_percent,
        transparency_score=q.transparency_score,
    )


def _filing(f: FilingRecord) -> FilingHTTP:
    return FilingHTTP(
        date=f.filing_date,
        form=f.form,
        description=f.description,
        url=f.document_url,
        accession_number=f.accession_id,
    )


def _master(m: MasterSummary) -> MasterSummaryHTTP:
    return MasterSummaryHTTP(
        big_picture=m.big_picture,
        transparency_trend=m.transparency_trend,
        transparency_trend_direction=m.transparency_trend_direction.value,
        broken_promises=[present_broken_promise(c) for c in m.broken_promises],
        beat_count=m.beat_count,
        miss_count=m.miss_count,
        avg_surprise=m.avg_surprise,
        revenue_trend=m.revenue_trend.value,
        guidance_accuracy=m.guidance_accuracy.value,
    )


def _yearly(y: YearlySummary) -> YearlySummaryHTTP:
    return YearlySummaryHTTP(
        beat_count=y.beat_count,
        miss_count=y.miss_count,
        avg_surprise=y.avg_surprise,
        revenue_trend=y.revenue_trend.value,
        guidance_accuracy=y.guidance_accuracy.value,
        overall_sentiment=y.overall_sentiment,
    )


class TickerPresenter:
    """Presenter for ``/ticker/{ticker}`` success responses."""

    def present(self, snapshot: TickerSnapshot) -> TickerOverviewHTTP:
        return TickerOverviewHTTP(
            ticker=snapshot.ticker,
            company_name=snapshot.company_name,
            sector=snapshot.sector,
            overall_transparency_score=snapshot.overall_transparency_score,
            prices=[PricePointHTTP(date=p.date, close=p.close) for p in snapshot.prices],
            earnings=[_quarter(q) for q in snapshot.quarters],
            truth_translator=[present_narrative_entry(n) for n in snapshot.narratives],
            master_summary=_master(snapshot.master_summary),
            yearly_summary=_yearly(snapshot.yearly_summary),
            is_demo=snapshot.is_demo,
            filings=[_filing(f) for f in snapshot.filings] if snapshot.filings else None,
        )
