# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Prompt builders for narrative synthesis.

Both prompts ask for a single JSON object whose shape matches the parsers in
``earnings_insight.domain.services.narrative_contract``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from earnings_insight.domain.entities.reconciled_quarter import ReconciledQuarter

__all__ = ["QuarterPromptContext", "build_aggregate_prompt", "build_quarter_prompt"]


@dataclass(frozen=True, slots=True)
class QuarterPromptContext:
    """Inputs embedded into the per-quarter prompt."""

    ticker: str
    company_name: str
    quarter: str
    report_date: date
    eps_estimate: float
    eps_actual: float
    surprise_percent: float
    stock_reaction_percent: float
    filing_description: str | None = None


def _signed(value: float) -> str:
    return f"{value:+.1f}"


def build_quarter_prompt(ctx: QuarterPromptContext) -> str:
    """Render the script-vs-reality prompt for one quarter."""
    outcome = "BEAT" if ctx.eps_actual >= ctx.eps_estimate else "MISS"
    filing = (
        f'\nSEC 8-K filing context: "{ctx.filing_description}"'
        if ctx.filing_description
        else ""
    )
    return f"""You are a friendly financial analyst explaining earnings results to beginners. Avoid jargon and talk the way a smart friend would.

Analyze this earnings quarter for {ctx.company_name} ({ctx.ticker}):

Quarter: {ctx.quarter}
Earnings Date: {ctx.report_date.isoformat()}
EPS Estimate: ${ctx.eps_estimate:.2f}
EPS Actual: ${ctx.eps_actual:.2f}
Surprise: {_signed(ctx.surprise_percent)}% ({outcome})
Stock Reaction: {_signed(ctx.stock_reaction_percent)}% next day{filing}

Return a JSON object with exactly this structure:
{{
  "script": [
    "Point 1: the bold claim or talking point management most likely pushed (the hype)",
    "Point 2: another piece of management spin or a forward-looking promise",
    "Point 3: a third talking point or guidance claim"
  ],
  "reality": [
    "Point 1: what actually happened, backed by the numbers",
    "Point 2: another reality check with data",
    "Point 3: the red flag, the most concerning thing they tried to downplay"
  ],
  "verdicts": ["delivered" | "partial" | "missed", "...", "..."],
  "analystTake": "A 3-4 sentence beginner-friendly paragraph."
}}

RULES:
- "script" has exactly 3 points: what management WANTS investors to hear.
- "reality" has exactly 3 points; the 3rd is the biggest red flag.
- "verdicts" has exactly 3 values, each "delivered", "partial" or "missed", matching script/reality 1:1.
- Use plain English and explain any financial term you need.
- Be specific about numbers and percentages when available.
- Never promise profit or certainty; say "likely", "potential", "historically".
- "analystTake" should read like a smart friend explaining what happened, honest but not alarmist."""


def build_aggregate_prompt(
    ticker: str,
    company_name: str,
    quarters: Sequence[ReconciledQuarter],
) -> str:
    """Render the cross-quarter "big picture" prompt."""
    lines = "\n".join(
        f"- {q.quarter}: EPS ${q.eps_actual:.2f} vs ${q.eps_estimate:.2f} estimate "
        f"({_signed(q.surprise_percent)}% surprise), stock {_signed(q.stock_reaction_percent)}% "
        f"next day, transparency score {q.transparency_score}/100"
        for q in quarters
    )
    return f"""You are a friendly financial analyst reviewing the last {len(quarters)} earnings quarters of {company_name} ({ticker}) for beginner investors.

Quarter by quarter:
{lines}

Return a JSON object with exactly this structure:
{{
  "bigPicture": "A 5-7 sentence narrative of the year: what management promised, how the numbers turned out, and whether their language got clearer or vaguer over time.",
  "brokenPromises": [
    {{
      "quarter": "Q? YYYY",
      "promise": "What management likely claimed that quarter",
      "reality": "What the later numbers showed instead",
      "verdict": "missed" | "partial"
    }}
  ]
}}

RULES:
- "brokenPromises" has between 0 and 3 entries; use an empty list if nothing stands out.
- "verdict" is only ever "missed" or "partial".
- Only reference the quarters listed above.
- Use plain English; never promise profit or certainty."""
