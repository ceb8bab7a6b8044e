# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Gemini transport client settings.

Environment variables (``GEMINI_`` prefix): ``GEMINI_API_KEY``,
``GEMINI_MODEL``, ``GEMINI_BASE_URL``, ``GEMINI_TIMEOUT_S``,
``GEMINI_TEMPERATURE``.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from earnings_insight.config.settings import is_usable_key


class GeminiSettings(BaseSettings):
    """Configuration for the Gemini ``generateContent`` client."""

    api_key: SecretStr | None = Field(None, description="Gemini API key.")
    model: str = Field("gemini-2.5-flash", min_length=1, description="Model name.")
    base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta",
        description="Generative Language API base URL.",
    )
    timeout_s: float = Field(30.0, gt=0, description="Per-request timeout in seconds.")
    temperature: float = Field(0.7, ge=0.0, le=2.0, description="Sampling temperature.")

    model_config = SettingsConfigDict(env_prefix="GEMINI_", env_file=".env", extra="ignore")

    @property
    def api_key_configured(self) -> bool:
        return is_usable_key(self.api_key)
