# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Adapter Gateway: EDGAR submissions → recent 8-K ``FilingRecord`` list.

Resolution order:
    1. Ticker → CIK via ``company_tickers.json``.
    2. Fallback: CIK scraped from the browse-edgar atom feed.
    3. CIK → submissions; ``filings.recent`` filtered to form ``8-K``.

An unresolved issuer or an empty 8-K list is ``None``. Transport and mapping
failures raise ``EdgarError`` subclasses; callers treat filings as optional
and downgrade those to "no filings".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any, Final

from earnings_insight.application.interfaces.market_data_gateway import FilingsGateway
from earnings_insight.domain.entities.market import FilingRecord
from earnings_insight.domain.exceptions.edgar import EdgarMappingError
from earnings_insight.infrastructure.external_apis.edgar.client import EdgarClient
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

EARNINGS_FORM: Final[str] = "8-K"
DEFAULT_DESCRIPTION: Final[str] = "Form 8-K Filing"


def _column(recent: Mapping[str, Any], name: str) -> Sequence[Any]:
    values = recent.get(name)
    if not isinstance(values, list):
        raise EdgarMappingError(
            "EDGAR submissions are missing a filings column", details={"column": name}
        )
    return values


class EdgarGateway(FilingsGateway):
    """Filings gateway backed by :class:`EdgarClient`."""

    def __init__(self, client: EdgarClient) -> None:
        self._client = client

    async def resolve_cik(self, ticker: str) -> str | None:
        """Return the issuer CIK (unpadded digits) for ``ticker``, if known."""
        symbol = ticker.upper()
        mapping = await self._client.company_tickers()
        for entry in mapping.values():
            if isinstance(entry, Mapping) and entry.get("ticker") == symbol:
                return str(entry.get("cik_str"))
        logger.info("edgar_ticker_map_miss", extra={"ticker": symbol})
        return await self._client.browse_company_cik(symbol)

    async def fetch_recent_filings(
        self, ticker: str, *, limit: int = 4
    ) -> list[FilingRecord] | None:
        cik = await self.resolve_cik(ticker)
        if not cik:
            logger.info("edgar_cik_unresolved", extra={"ticker": ticker})
            return None

        submissions = await self._client.submissions(cik)
        filings = submissions.get("filings")
        recent = filings.get("recent") if isinstance(filings, Mapping) else None
        if not isinstance(recent, Mapping):
            return None

        forms = _column(recent, "form")
        accessions = _column(recent, "accessionNumber")
        dates = _column(recent, "filingDate")
        documents = _column(recent, "primaryDocument")
        descriptions = recent.get("primaryDocDescription") or []

        cik_path = str(int(cik))
        results: list[FilingRecord] = []
        for i, form in enumerate(forms):
            if len(results) >= limit:
                break
            if form != EARNINGS_FORM:
                continue
            try:
                accession = str(accessions[i])
                description = descriptions[i] if i < len(descriptions) else ""
                results.append(
                    FilingRecord(
                        filing_date=date.fromisoformat(str(dates[i])),
                        form=str(form),
                        description=str(description or DEFAULT_DESCRIPTION),
                        document_url=(
                            f"{self._client.archives_base_url}/{cik_path}/"
                            f"{accession.replace('-', '')}/{documents[i]}"
                        ),
                        accession_id=accession,
                    )
                )
            except (IndexError, ValueError) as exc:
                raise EdgarMappingError(
                    "EDGAR filing row could not be mapped", details={"index": i}
                ) from exc

        logger.info(
            "edgar_filings_mapped",
            extra={"ticker": ticker, "cik": cik_path, "count": len(results)},
        )
        return results or None
