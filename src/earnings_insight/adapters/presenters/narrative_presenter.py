# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Presenter: narrative entities → HTTP schemas.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from earnings_insight.adapters.schemas.http.narrative import (
    AggregateNarrativeHTTP,
    BrokenPromiseHTTP,
    NarrativeEntryHTTP,
)
from earnings_insight.domain.entities.narrative import (
    AggregateNarrative,
    Contradiction,
    NarrativeEntry,
)


def present_narrative_entry(entry: NarrativeEntry) -> NarrativeEntryHTTP:
    return NarrativeEntryHTTP(
        quarter=entry.quarter,
        date=entry.report_date,
        script=list(entry.script_points),
        reality=list(entry.reality_points),
        verdicts=[v.value for v in entry.verdicts],
        analyst_take=entry.narrative_summary,
        filing_url=entry.filing_url,
    )


def present_broken_promise(c: Contradiction) -> BrokenPromiseHTTP:
    return BrokenPromiseHTTP(
        quarter=c.quarter, promise=c.claim, reality=c.outcome, verdict=c.verdict.value
    )


class NarrativePresenter:
    """Presenter for ``/analyze`` and ``/summarize`` success responses."""

    def present_entry(self, entry: NarrativeEntry) -> NarrativeEntryHTTP:
        return present_narrative_entry(entry)

    def present_aggregate(self, narrative: AggregateNarrative) -> AggregateNarrativeHTTP:
        return AggregateNarrativeHTTP(
            big_picture=narrative.overall_summary,
            broken_promises=[present_broken_promise(c) for c in narrative.contradictions],
        )
