# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Health endpoint (Adapters Layer).

Purpose:
    Liveness signal for container orchestrators and load balancers. The
    service holds no connections of its own, so liveness is the whole story.
"""

from __future__ import annotations

import typing as t

from fastapi import APIRouter

from earnings_insight.adapters.schemas.http.base import BaseHTTPSchema

router = APIRouter(tags=["Health"])


class LivenessResponse(BaseHTTPSchema):
    """Liveness response indicating the process is running."""

    status: t.Literal["ok"] = "ok"


@router.get("/healthz", response_model=LivenessResponse, summary="Liveness probe")
async def healthz() -> LivenessResponse:
    return LivenessResponse()
