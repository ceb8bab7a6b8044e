# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""EDGAR domain exceptions.

The filings lookup is optional for every flow, so these never reach a caller
directly; the gateway downgrades them to "no filings".
"""

from __future__ import annotations

from typing import Any

from .base import DomainError, ErrorKind


class EdgarError(DomainError):
    """Base class for EDGAR failures."""

    code = "EDGAR_ERROR"
    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class EdgarNotFound(EdgarError):
    code = "EDGAR_NOT_FOUND"
    kind = ErrorKind.DATA


class EdgarMappingError(EdgarError):
    """EDGAR payload could not be mapped (non-JSON, missing keys)."""

    code = "EDGAR_MAPPING_ERROR"
    kind = ErrorKind.UPSTREAM_MALFORMED
