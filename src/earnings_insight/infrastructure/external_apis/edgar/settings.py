# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""EDGAR transport client settings.

Purpose:
    Base URLs, requester identification and timeout for the SEC EDGAR client.

Notes:
    - ``SEC_USER_AGENT`` identifies the requester as the SEC Fair Access
      policy requires (name plus contact email).
    - Other values use the ``EDGAR_`` prefix.
"""

from __future__ import annotations

from typing import Final

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FALLBACK_USER_AGENT: Final[str] = "EarningsInsight/1.0 (not-configured)"
USER_AGENT_PLACEHOLDER: Final[str] = "REPLACE_WITH_YOUR_EMAIL"


class EdgarSettings(BaseSettings):
    """Configuration for the EDGAR HTTP client.

    Environment variables:

    * ``SEC_USER_AGENT``
    * ``EDGAR_DATA_BASE_URL`` (submissions API)
    * ``EDGAR_WWW_BASE_URL`` (ticker map, browse feed, archives)
    * ``EDGAR_TIMEOUT_S``
    """

    user_agent: str | None = Field(
        None,
        description="Requester identification, e.g. 'EarningsInsight/1.0 (you@example.com)'.",
        validation_alias="SEC_USER_AGENT",
    )
    data_base_url: str = Field(
        "https://data.sec.gov",
        description="Base URL for the EDGAR submissions API.",
    )
    www_base_url: str = Field(
        "https://www.sec.gov",
        description="Base URL for the ticker map, browse-edgar and filing archives.",
    )
    timeout_s: float = Field(8.0, gt=0, description="Per-request timeout in seconds.")

    model_config = SettingsConfigDict(
        env_prefix="EDGAR_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def user_agent_configured(self) -> bool:
        ua = (self.user_agent or "").strip()
        return bool(ua) and USER_AGENT_PLACEHOLDER not in ua

    def resolved_user_agent(self) -> str:
        """The configured user agent, or the fallback when unset/placeholder."""
        if self.user_agent_configured:
            return (self.user_agent or "").strip()
        return FALLBACK_USER_AGENT
