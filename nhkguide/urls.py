"""URL builders for the Program Guide endpoints.

Codes are passed through as-is; the API is the only validator. Each path
segment is percent-encoded so a value can never change the URL structure.
"""

from __future__ import annotations

from datetime import date
from urllib.parse import quote, urlencode

__all__ = [
    "DEFAULT_BASE_URL",
    "build_url",
    "now_on_air_url",
    "program_genre_url",
    "program_info_url",
    "program_list_url",
    "redact_key",
]

DEFAULT_BASE_URL = "http://api.nhk.or.jp"

_REDACTED = "***"


def _segment(value: str | date) -> str:
    if isinstance(value, date):
        value = value.isoformat()
    return quote(str(value), safe="")


def build_url(base_url: str, version: str, *segments: str | date, api_key: str) -> str:
    """Return `{base}/{version}/pg/{segments...}.json?key={api_key}`."""
    base = (base_url or "").rstrip("/")
    path = "/".join(_segment(part) for part in (version, "pg", *segments))
    query = urlencode({"key": api_key})
    return f"{base}/{path}.json?{query}"


def program_list_url(
    base_url: str, version: str, area: str, service: str, day: str | date, *, api_key: str
) -> str:
    return build_url(base_url, version, "list", area, service, day, api_key=api_key)


def program_genre_url(
    base_url: str,
    version: str,
    area: str,
    service: str,
    genre: str,
    day: str | date,
    *,
    api_key: str,
) -> str:
    return build_url(base_url, version, "genre", area, service, genre, day, api_key=api_key)


def program_info_url(
    base_url: str, version: str, area: str, service: str, program_id: str, *, api_key: str
) -> str:
    return build_url(base_url, version, "info", area, service, program_id, api_key=api_key)


def now_on_air_url(base_url: str, version: str, area: str, service: str, *, api_key: str) -> str:
    return build_url(base_url, version, "now", area, service, api_key=api_key)


def redact_key(url: str, api_key: str | None) -> str:
    """Replace the API key in a URL with a placeholder, for logs and errors."""
    if not api_key:
        return url
    return url.replace(urlencode({"key": api_key}), f"key={_REDACTED}")
