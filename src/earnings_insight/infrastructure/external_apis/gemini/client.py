# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Gemini Transport Client (``generateContent`` REST).

Sends one prompt with ``responseMimeType=application/json`` and returns the
concatenated text parts of the first candidate. Exactly one call per
request; no retries.

Errors:
    * Transport failures, timeouts, non-2xx: ``NarrativeModelUnavailable``.
    * Non-JSON envelope or no text in the reply: ``NarrativeMalformed``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from earnings_insight.domain.exceptions.narrative import (
    NarrativeMalformed,
    NarrativeModelUnavailable,
)
from earnings_insight.infrastructure.external_apis.base_client import JsonHttpClient
from earnings_insight.infrastructure.external_apis.gemini.settings import GeminiSettings


def _candidate_text(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, Mapping) else None
    parts = content.get("parts") if isinstance(content, Mapping) else None
    if not isinstance(parts, list):
        return ""
    return "".join(
        p["text"] for p in parts if isinstance(p, Mapping) and isinstance(p.get("text"), str)
    )


class GeminiClient(JsonHttpClient):
    """Async client for a single Gemini model."""

    provider = "gemini"
    display_name = "Gemini"
    unavailable_error = NarrativeModelUnavailable
    malformed_error = NarrativeMalformed

    def __init__(
        self,
        settings: GeminiSettings,
        *,
        http: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ) -> None:
        super().__init__(
            base_url=settings.base_url,
            timeout_s=timeout_s if timeout_s is not None else settings.timeout_s,
            http=http,
        )
        self._api_key = settings.api_key.get_secret_value() if settings.api_key else ""
        self._model = settings.model
        self._temperature = settings.temperature

    @property
    def model(self) -> str:
        return self._model

    async def generate_content(self, prompt: str) -> str:
        """Send ``prompt`` and return the reply text.

        Raises:
            NarrativeModelUnavailable: Transport failure or non-2xx.
            NarrativeMalformed: The reply carried no text.
        """
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": self._temperature,
            },
        }
        response = await self._request(
            "POST",
            f"/models/{quote(self._model, safe='')}:generateContent",
            endpoint="generate_content",
            label="Gemini",
            params={"key": self._api_key},
            json_body=body,
        )
        text = _candidate_text(
            self._decode_json(response, endpoint="generate_content", label="Gemini")
        )
        if not text.strip():
            raise NarrativeMalformed(
                "Gemini returned an empty response", details={"model": self._model}
            )
        return text
