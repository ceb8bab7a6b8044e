# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Earnings Insight Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated application configuration. Provider credentials live in
    the per-provider settings under ``infrastructure/external_apis``; this
    module holds service-wide knobs and the credential check they share.

Design:
    - Pydantic v2 BaseSettings reading the environment and an optional ``.env``.
    - ``extra='ignore'`` because the same ``.env`` also feeds provider settings.
    - Environment enumeration for behavior toggles (includes TEST).
    - Singleton accessor ``get_settings()`` with LRU cache.
    - Structured startup log without secrets.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from typing import Final

from pydantic import Field, SecretStr, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Value shipped in .env.example; treated as "not configured".
PLACEHOLDER_API_KEY: Final[str] = "your_key_here"


def is_usable_key(key: SecretStr | str | None) -> bool:
    """Return True when ``key`` is set, non-blank and not the placeholder."""
    if key is None:
        return False
    raw = key.get_secret_value() if isinstance(key, SecretStr) else key
    raw = raw.strip()
    return bool(raw) and raw != PLACEHOLDER_API_KEY


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Service-wide configuration.

    Adapters and Infrastructure may read it directly; use cases receive plain
    values through dependency injection.
    """

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level name.",
        validation_alias="LOG_LEVEL",
    )
    service_version: str = Field(
        default="0.1.0",
        description="Version reported in OpenAPI and startup logs.",
        validation_alias="SERVICE_VERSION",
    )

    # Raw env for CORS; parsed into ``cors_allow_origins`` below.
    cors_allow_origins_raw: str | None = Field(
        default=None,
        description="Allowed CORS origins (comma-separated).",
        validation_alias="ALLOWED_ORIGINS",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Parsed CORS origins. '*' is rejected in production.",
    )

    narrative_cache_ttl_s: float = Field(
        default=3600.0,
        gt=0,
        le=7 * 24 * 3600,
        description="TTL for cached narratives (per-quarter and aggregate).",
        validation_alias="NARRATIVE_CACHE_TTL_S",
    )
    analyze_filings_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="How many recent 8-K filings the analyze flow inspects.",
        validation_alias="EDGAR_ANALYZE_FILINGS_LIMIT",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _parse_cors(self) -> Settings:
        raw = self.cors_allow_origins_raw
        if raw and not self.cors_allow_origins:
            self.cors_allow_origins = [o.strip() for o in raw.split(",") if o.strip()]
        if self.environment is Environment.PRODUCTION and "*" in self.cors_allow_origins:
            raise ValueError("ALLOWED_ORIGINS may not contain '*' in production")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton ``Settings`` instance.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        logger.exception("Invalid application configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    logger.info(
        "settings_initialized",
        extra={
            "environment": settings.environment.value,
            "cors_count": len(settings.cors_allow_origins),
            "narrative_cache_ttl_s": settings.narrative_cache_ttl_s,
            "analyze_filings_limit": settings.analyze_filings_limit,
        },
    )
    return settings
