# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Adapter Gateway: Gemini as a ``NarrativeModelPort``."""

from __future__ import annotations

from earnings_insight.application.interfaces.narrative_model import NarrativeModelPort
from earnings_insight.infrastructure.external_apis.gemini.client import GeminiClient
from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


class GeminiGateway(NarrativeModelPort):
    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    async def generate_json(self, prompt: str) -> str:
        logger.info(
            "narrative_model_call",
            extra={"model": self._client.model, "prompt_chars": len(prompt)},
        )
        text = await self._client.generate_content(prompt)
        logger.info(
            "narrative_model_reply",
            extra={"model": self._client.model, "reply_chars": len(text)},
        )
        return text
