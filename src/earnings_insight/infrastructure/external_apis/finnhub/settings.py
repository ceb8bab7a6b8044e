# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Finnhub transport client settings.

Environment variables (``FINNHUB_`` prefix): ``FINNHUB_API_KEY``,
``FINNHUB_BASE_URL``, ``FINNHUB_TIMEOUT_S``, ``FINNHUB_EARNINGS_LIMIT``.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from earnings_insight.config.settings import is_usable_key


class FinnhubSettings(BaseSettings):
    """Configuration for the Finnhub earnings/profile client."""

    api_key: SecretStr | None = Field(None, description="Finnhub API token.")
    base_url: str = Field("https://finnhub.io/api/v1", description="Finnhub REST base URL.")
    timeout_s: float = Field(10.0, gt=0, description="Per-request timeout in seconds.")
    earnings_limit: int = Field(4, ge=1, le=40, description="Quarters requested per ticker.")

    model_config = SettingsConfigDict(env_prefix="FINNHUB_", env_file=".env", extra="ignore")

    @property
    def api_key_configured(self) -> bool:
        return is_usable_key(self.api_key)
