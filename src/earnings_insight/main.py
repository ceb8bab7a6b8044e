# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Application Entry (Adapters Bootstrap)

Synopsis:
    FastAPI bootstrap that wires middleware, exception handlers and routers.
    Provides an application factory (``create_app``) and a module-level eager
    app (``app``) for uvicorn and tests.

Design:
    • Bootstrap only (no business logic).
    • Root JSON logging configured at import time.
    • Provider clients are per request (see ``dependencies``); the lifespan
      only reports which providers are configured.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from earnings_insight import __version__
from earnings_insight.adapters.routers.health_router import router as health_router
from earnings_insight.adapters.routers.metrics_router import router as metrics_router
from earnings_insight.adapters.routers.narrative_router import router as narrative_router
from earnings_insight.adapters.routers.ticker_router import router as ticker_router
from earnings_insight.config.settings import Settings, get_settings
from earnings_insight.dependencies.providers import (
    get_edgar_settings,
    get_finnhub_settings,
    get_gemini_settings,
    get_polygon_settings,
)
from earnings_insight.infrastructure.http.errors import install_exception_handlers
from earnings_insight.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
)
from earnings_insight.infrastructure.middleware.access_log import AccessLogMiddleware
from earnings_insight.infrastructure.middleware.request_id import RequestIdMiddleware

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
configure_root_logging()
logger = get_json_logger(__name__)


def _stable_operation_id(route: APIRoute) -> str:
    """Deterministic operationId, e.g. ``get__ticker_ticker``."""
    methods = ",".join(sorted(route.methods or []))
    path = route.path_format.replace("/", "_").replace("{", "").replace("}", "")
    return f"{methods.lower()}_{path.lower()}"


@asynccontextmanager
async def runtime_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log provider configuration once at startup (booleans only)."""
    logger.info(
        "providers_configured",
        extra={
            "polygon": get_polygon_settings().api_key_configured,
            "finnhub": get_finnhub_settings().api_key_configured,
            "gemini": get_gemini_settings().api_key_configured,
            "sec_user_agent": get_edgar_settings().user_agent_configured,
        },
    )
    yield
    logger.info("service_shutdown")


def _attach_cors(app: FastAPI, settings: Settings) -> None:
    allow_origins = settings.cors_allow_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials="*" not in allow_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings: Settings = get_settings()
    configure_root_logging(settings.log_level.upper())

    app = FastAPI(
        title="Earnings Insight API",
        version=settings.service_version or __version__,
        description="Earnings calls, script vs. reality.",
        lifespan=runtime_lifespan,
        generate_unique_id_function=_stable_operation_id,
    )

    install_exception_handlers(app)

    # Added last runs first: request id must be set before the access log.
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)
    _attach_cors(app, settings)

    app.include_router(ticker_router)
    app.include_router(narrative_router)
    app.include_router(health_router)
    app.include_router(metrics_router)

    logger.info(
        "service_startup",
        extra={
            "service": "earnings-insight-api",
            "env": settings.environment.value,
            "version": app.version,
        },
    )
    return app


# Eager app for uvicorn and tests.
app: FastAPI = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("earnings_insight.main:app", host="0.0.0.0", port=8000)  # noqa: S104
