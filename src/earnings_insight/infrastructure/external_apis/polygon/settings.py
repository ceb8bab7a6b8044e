# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Polygon transport client settings.

Environment variables (``POLYGON_`` prefix): ``POLYGON_API_KEY``,
``POLYGON_BASE_URL``, ``POLYGON_TIMEOUT_S``.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from earnings_insight.config.settings import is_usable_key


class PolygonSettings(BaseSettings):
    """Configuration for the Polygon aggregates client."""

    api_key: SecretStr | None = Field(None, description="Polygon API key.")
    base_url: str = Field("https://api.polygon.io", description="Polygon REST base URL.")
    timeout_s: float = Field(10.0, gt=0, description="Per-request timeout in seconds.")

    model_config = SettingsConfigDict(env_prefix="POLYGON_", env_file=".env", extra="ignore")

    @property
    def api_key_configured(self) -> bool:
        return is_usable_key(self.api_key)
