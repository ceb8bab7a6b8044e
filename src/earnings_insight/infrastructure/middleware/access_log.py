# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Access Log Middleware.

Summary:
    One ``access_log`` record per request with method, route path, status,
    latency and the correlation id.

Notes:
    Query strings are not logged.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from earnings_insight.infrastructure.logging.logger import get_json_logger

_logger: logging.Logger = get_json_logger(__name__)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Structured access logging middleware."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Log a single access record around the downstream handler.

        Raises:
            Exception: Re-raised after logging if the downstream handler fails.
        """
        t0 = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            log: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code if response is not None else 500,
                "elapsed_ms": round((time.perf_counter() - t0) * 1000.0, 2),
                "client_ip": request.client.host if request.client else None,
                "ok": response is not None,
            }
            _logger.info("access_log", extra=log)
