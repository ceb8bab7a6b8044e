# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Narrative Synthesis Exceptions

Purpose:
    Failures of the language-model call. All of them carry ``source="model"``
    in ``details`` so the boundary can tell model failures apart from data
    provider failures.

Layer: domain/exceptions
"""
from __future__ import annotations

from typing import Any

from .base import DomainError, ErrorKind


class NarrativeModelError(DomainError):
    """Base class for language-model failures."""

    code = "MODEL_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        merged = {"source": "model"}
        merged.update(details or {})
        super().__init__(message, details=merged)


class NarrativeModelUnavailable(NarrativeModelError):
    """Model endpoint unreachable, timed out or answered non-2xx."""

    code = "MODEL_UNAVAILABLE"
    kind = ErrorKind.TRANSPORT


class NarrativeMalformed(NarrativeModelError):
    """Model output failed to parse or broke the narrative contract."""

    code = "MODEL_OUTPUT_MALFORMED"
    kind = ErrorKind.UPSTREAM_MALFORMED
