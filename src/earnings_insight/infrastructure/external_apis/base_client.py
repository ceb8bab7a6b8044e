# Copyright (c) Earnings Insight.
# SPDX-License-Identifier: MIT
"""Shared async JSON transport for external providers.

This transport is framework-agnostic and provides:

* Async HTTP (httpx) with a per-request timeout.
* A single attempt per call; no retries, no backoff. Rate limits are reported
  as errors, not smoothed.
* Deterministic mapping of transport failures and non-2xx statuses to the
  provider's domain errors.
* Request/trace id propagation and Prometheus metrics.

Notes:
    * httpx exception types never cross this boundary.
    * Credentials travel in query parameters for some providers, so URLs are
      never logged or copied into error details; only logical paths are.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import suppress
from typing import Any, ClassVar, Final

import httpx

from earnings_insight.domain.exceptions.base import DomainError
from earnings_insight.infrastructure.logging.logger import (
    get_json_logger,
    get_request_id,
    get_trace_id,
)
from earnings_insight.infrastructure.observability.metrics import (
    observe_upstream_request,
    upstream_http_status_total,
)

logger = get_json_logger(__name__)

_BODY_PREVIEW_CHARS: Final[int] = 300


class JsonHttpClient:
    """Base class for provider clients.

    Subclasses set the class attributes below and add endpoint methods that
    call :meth:`_request` / :meth:`_decode_json`.

    Attributes:
        provider: Metrics label and log field (``"polygon"``, ...).
        display_name: Human name used in error messages (``"Polygon"``).
        unavailable_error: Raised for transport failures and non-2xx.
        malformed_error: Raised for bodies that are not the expected JSON.
        not_found_error: Raised for 404 when set; otherwise 404 is treated
            like any other non-2xx.
    """

    provider: ClassVar[str] = "upstream"
    display_name: ClassVar[str] = "Upstream"
    unavailable_error: ClassVar[type[DomainError]] = DomainError
    malformed_error: ClassVar[type[DomainError]] = DomainError
    not_found_error: ClassVar[type[DomainError] | None] = None
    default_headers: ClassVar[Mapping[str, str]] = {"Accept": "application/json"}

    def __init__(
        self,
        *,
        base_url: str,
        timeout_s: float,
        http: httpx.AsyncClient | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Provider base URL; trailing slashes are stripped.
            timeout_s: Per-request timeout in seconds.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client is
                created and owned by this instance.
            headers: Extra default headers (e.g. ``User-Agent``).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout_s)
        # Sent per request so a shared client keeps its own defaults.
        self._headers = {**self.default_headers, **(headers or {})}
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(timeout=self._timeout)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}{path}"

    def _request_headers(self) -> dict[str, str]:
        headers = dict(self._headers)
        request_id = get_request_id()
        trace_id = get_trace_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        if trace_id:
            headers["x-trace-id"] = trace_id
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        endpoint: str,
        label: str,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
    ) -> httpx.Response:
        """Perform one HTTP request and return a 2xx response.

        Args:
            method: HTTP method.
            path: Path relative to the base URL, or an absolute URL.
            endpoint: Logical endpoint name for metrics.
            label: Human label for error messages (e.g. ``"Polygon prices"``).
            params: Query parameters.
            json_body: JSON request body, if any.

        Raises:
            DomainError: ``not_found_error`` on 404 (when set), otherwise
                ``unavailable_error`` for transport failures and non-2xx.
        """
        with observe_upstream_request(provider=self.provider, endpoint=endpoint) as obs:
            try:
                response = await self._client.request(
                    method,
                    self._url(path),
                    params=params,
                    json=json_body,
                    headers=self._request_headers(),
                    timeout=self._timeout,
                )
            except httpx.TimeoutException as exc:
                obs.mark_error("timeout")
                raise self.unavailable_error(
                    f"{label} request timed out after {self._timeout:g}s",
                    details={"endpoint": endpoint, "timeout_s": self._timeout},
                ) from exc
            except httpx.RequestError as exc:
                obs.mark_error("transport")
                raise self.unavailable_error(
                    f"{label} transport failure: {type(exc).__name__}",
                    details={"endpoint": endpoint, "error": str(exc)},
                ) from exc

            with suppress(Exception):
                upstream_http_status_total.labels(
                    self.provider, endpoint, str(response.status_code)
                ).inc()

            if response.is_success:
                return response

            obs.mark_error(f"http_{response.status_code}")
            body = response.text[:_BODY_PREVIEW_CHARS]
            logger.warning(
                "upstream_http_error",
                extra={
                    "provider": self.provider,
                    "endpoint": endpoint,
                    "status": response.status_code,
                },
            )
            details = {"endpoint": endpoint, "status": response.status_code}
            message = f"{label} error ({response.status_code}): {body or response.reason_phrase}"
            if response.status_code == 404 and self.not_found_error is not None:
                raise self.not_found_error(message, details=details)
            raise self.unavailable_error(message, details=details)

    def _decode_json(self, response: httpx.Response, *, endpoint: str, label: str) -> Any:
        """Parse a JSON body.

        Raises:
            DomainError: ``malformed_error`` when the body is not JSON.
        """
        try:
            return response.json()
        except ValueError as exc:
            raise self.malformed_error(
                f"{label} response was not valid JSON",
                details={"endpoint": endpoint, "error": str(exc)},
            ) from exc

    async def _get_json(
        self,
        path: str,
        *,
        endpoint: str,
        label: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        response = await self._request("GET", path, endpoint=endpoint, label=label, params=params)
        return self._decode_json(response, endpoint=endpoint, label=label)
