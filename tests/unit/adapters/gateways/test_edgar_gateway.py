# tests/unit/adapters/gateways/test_edgar_gateway.py
from __future__ import annotations

from datetime import date

import httpx
import pytest
import respx

from earnings_insight.adapters.gateways.edgar_gateway import EdgarGateway
from earnings_insight.domain.exceptions.edgar import EdgarMappingError
from earnings_insight.infrastructure.external_apis.edgar.client import EdgarClient
from earnings_insight.infrastructure.external_apis.edgar.settings import EdgarSettings

TICKERS_URL = "https://www.sec.gov/files/company_tickers.json"
BROWSE_URL = "https://www.sec.gov/cgi-bin/browse-edgar"
SUBMISSIONS_URL = "https://data.sec.gov/submissions/CIK0000320193.json"

TICKER_MAP = {"0": {"cik_str": 320193, "ticker": "AAPL", "title": "Apple Inc."}}

SUBMISSIONS = {
    "cik": "320193",
    "filings": {
        "recent": {
            "form": ["10-Q", "8-K", "4", "8-K", "8-K"],
            "accessionNumber": [
                "0000320193-25-000070",
                "0000320193-25-000071",
                "0000320193-25-000072",
                "0000320193-25-000073",
                "0000320193-25-000074",
            ],
            "filingDate": [
                "2025-10-31",
                "2025-10-30",
                "2025-10-20",
                "2025-07-31",
                "2025-05-01",
            ],
            "primaryDocument": ["q.htm", "a8-k.htm", "x.xml", "b8-k.htm", "c8-k.htm"],
            "primaryDocDescription": ["10-Q", "8-K", "4", "", "8-K"],
        }
    },
}


def _gateway(http: httpx.AsyncClient) -> EdgarGateway:
    return EdgarGateway(EdgarClient(EdgarSettings(), http=http))


@pytest.mark.asyncio
async def test_recent_8k_filings_are_filtered_and_linked() -> None:
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(TICKERS_URL).mock(return_value=httpx.Response(200, json=TICKER_MAP))
            respx.get(SUBMISSIONS_URL).mock(return_value=httpx.Response(200, json=SUBMISSIONS))
            filings = await _gateway(http).fetch_recent_filings("aapl", limit=2)

    assert filings is not None
    assert [f.accession_id for f in filings] == [
        "0000320193-25-000071",
        "0000320193-25-000073",
    ]
    first, second = filings
    assert first.filing_date == date(2025, 10, 30)
    assert first.form == "8-K"
    assert first.document_url == (
        "https://www.sec.gov/Archives/edgar/data/320193/000032019325000071/a8-k.htm"
    )
    assert second.description == "Form 8-K Filing"


@pytest.mark.asyncio
async def test_ticker_map_miss_falls_back_to_browse_feed() -> None:
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(TICKERS_URL).mock(return_value=httpx.Response(200, json={}))
            browse = respx.get(BROWSE_URL).mock(
                return_value=httpx.Response(200, text="<a href='x?CIK=0000320193&type=8-K'/>")
            )
            cik = await _gateway(http).resolve_cik("AAPL")

    assert cik == "0000320193"
    assert browse.calls.last.request.url.params["CIK"] == "AAPL"


@pytest.mark.asyncio
async def test_unresolved_issuer_is_absent() -> None:
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(TICKERS_URL).mock(return_value=httpx.Response(200, json={}))
            respx.get(BROWSE_URL).mock(return_value=httpx.Response(200, text="<feed/>"))
            assert await _gateway(http).fetch_recent_filings("ZZZZ") is None


@pytest.mark.asyncio
async def test_missing_filings_column_is_mapping_error() -> None:
    broken = {"filings": {"recent": {"form": ["8-K"], "filingDate": ["2025-01-30"]}}}
    async with httpx.AsyncClient() as http:
        with respx.mock:
            respx.get(TICKERS_URL).mock(return_value=httpx.Response(200, json=TICKER_MAP))
            respx.get(SUBMISSIONS_URL).mock(return_value=httpx.Response(200, json=broken))
            with pytest.raises(EdgarMappingError):
                await _gateway(http).fetch_recent_filings("AAPL")
