# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Request ID Middleware.

Summary:
    Gives every request a correlation id and echoes it on the response.

Contract:
    • Reads:  X-Request-ID (optional; kept when it matches a safe charset)
    • Writes: X-Request-ID (always)
    • Stores: request.state.request_id
    • Enriches logs and outbound provider calls via contextvars
"""

from __future__ import annotations

import re
import uuid
from typing import Final

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from earnings_insight.infrastructure.logging.logger import set_request_context

REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
_SAFE_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9\-_.:@]{1,128}$")


def coerce_request_id(raw: str | None) -> str:
    """Return ``raw`` when it is a safe token, otherwise a fresh UUID4."""
    if raw and _SAFE_RE.match(raw):
        return raw
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach ``request.state.request_id`` and emit the header on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        req_id = coerce_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = req_id
        set_request_context(request_id=req_id)

        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = req_id
        return response
