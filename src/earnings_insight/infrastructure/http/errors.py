# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""App-level exception handlers.

Routers map domain errors themselves; these handlers catch what escapes them
(request validation, HTTP exceptions, bugs) and keep the same flat
``{error, errorType}`` body.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from earnings_insight.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def error_body(message: str, *, error_type: str = "unknown", **extra: Any) -> dict[str, Any]:
    return {"error": message, "errorType": error_type, **extra}


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    return JSONResponse(
        status_code=422,
        content=error_body(
            "Request validation failed",
            error_type="validation",
            details=jsonable_errors(exc),
        ),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", "")), "type": err.get("type")}
        for err in exc.errors()
    ]


async def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def handle_unhandled_exception(request: Request, exc: Exception) -> Response:
    logger.exception(
        "unhandled_exception",
        extra={"path": request.url.path, "exc_type": type(exc).__name__},
    )
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unhandled_exception)
