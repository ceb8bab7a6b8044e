# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""
Base Domain Exceptions.

Summary:
    Canonical base class for domain/application exceptions. Every error carries
    a stable ``code`` and an ``ErrorKind`` so routers can map it to HTTP without
    inspecting messages.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure taxonomy surfaced to callers."""

    CONFIG = "config"
    DATA = "data"
    TRANSPORT = "transport"
    UPSTREAM_MALFORMED = "upstream-malformed"
    UNKNOWN = "unknown"


class DomainError(Exception):
    """Base class for all domain/application exceptions."""

    code: str = "DOMAIN_ERROR"
    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}


class ConfigurationError(DomainError):
    """A required credential or setting is missing."""

    code = "NOT_CONFIGURED"
    kind = ErrorKind.CONFIG


class DataUnavailableError(DomainError):
    """Upstream returned no usable records for the request."""

    code = "DATA_UNAVAILABLE"
    kind = ErrorKind.DATA
