"""Blocking HTTP transport built on top of httpx.

This module centralizes timeout/header defaults and maps httpx exceptions
into `TransportError`. Non-2xx responses are not raised on: the status code
is returned together with the fully buffered body so that callers can decode
either a payload or an error envelope from it.
"""

from __future__ import annotations

from typing import Mapping

import httpx
from loguru import logger

from nhkguide.errors import TransportError

__all__ = ["HttpClient"]

log = logger.bind(module="net.http")

_MIN_TIMEOUT_SECONDS = 0.1
DEFAULT_USER_AGENT = "nhkguide"


class HttpClient:
    """Small sync HTTP client with consistent defaults and error mapping.

    Notes:
        - A short-lived `httpx.Client` is created per request, so an instance
          holds no open connections and can be shared between threads.
        - Timeouts are clamped to at least `_MIN_TIMEOUT_SECONDS`.
        - Redirects are not followed; the API answers directly.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        user_agent: str | None = DEFAULT_USER_AGENT,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = float(max(_MIN_TIMEOUT_SECONDS, timeout_seconds))
        self.transport = transport

        merged: dict[str, str] = {"Accept": "application/json"}
        merged.update(dict(headers or {}))
        if user_agent and "User-Agent" not in merged:
            merged["User-Agent"] = user_agent
        self.headers = merged

    def _build_client(self) -> httpx.Client:
        kwargs: dict[str, object] = {
            "timeout": self.timeout_seconds,
            "follow_redirects": False,
            "headers": self.headers,
        }
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.Client(**kwargs)  # type: ignore[arg-type]

    def fetch(self, url: str, *, display_url: str | None = None) -> tuple[bytes, int]:
        """GET `url` and return `(body, status_code)`.

        `display_url` replaces `url` in logs and error messages, so that
        secrets carried in the query string are not leaked.

        Raises:
            TransportError: When the URL is empty or malformed (including hosts
                that fail IDNA encoding), or the request fails before a
                response is received.
        """
        target = (url or "").strip()
        shown = display_url or target
        if not target:
            raise TransportError("HTTP request failed: URL is empty.", url=shown)

        log.debug("GET {}", shown)
        try:
            with self._build_client() as client:
                response = client.get(target)
                body = response.read()
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            log.warning("GET {} failed: {}", shown, exc)
            raise TransportError(f"HTTP request failed: {exc}", url=shown) from exc

        status_code = int(response.status_code)
        log.debug("GET {} -> {} ({} bytes)", shown, status_code, len(body))
        return body, status_code
