"""Public facade for the NHK Program Guide API.

Every endpoint follows the same protocol: build the URL, fetch it, map a
non-200 response to `UpstreamApiError`, otherwise decode the body.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Callable, TypeVar

from nhkguide import urls
from nhkguide.decoding import (
    decode_description_list,
    decode_now_on_air_list,
    decode_program_list,
    map_api_error,
)
from nhkguide.models import DescriptionList, NowOnAirList, ProgramList
from nhkguide.net.http import HttpClient

if TYPE_CHECKING:
    import httpx

    from nhkguide.config import Settings

__all__ = ["NhkClient", "new_client"]

ResultT = TypeVar("ResultT")

_HTTP_OK = 200


class NhkClient:
    """Read-only client for the four Program Guide endpoints.

    Instances hold no mutable state and may be shared between threads.
    """

    __slots__ = ("_api_key", "_base_url", "_http")

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = urls.DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        transport: "httpx.BaseTransport | None" = None,
    ) -> None:
        self._api_key = str(api_key)
        self._base_url = (base_url or urls.DEFAULT_BASE_URL).rstrip("/")
        self._http = HttpClient(timeout_seconds=timeout_seconds, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: "Settings | None" = None,
        *,
        transport: "httpx.BaseTransport | None" = None,
    ) -> "NhkClient":
        """Build a client from `Settings` (defaults to `get_settings()`)."""
        if settings is None:
            from nhkguide.config import get_settings

            settings = get_settings()
        if not settings.api_key:
            raise ValueError("NHK_API_KEY is required to call the NHK API.")
        return cls(
            settings.api_key,
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            transport=transport,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"NhkClient(base_url={self._base_url!r})"

    def _call(self, url: str, decode: Callable[[bytes], ResultT]) -> ResultT:
        display_url = urls.redact_key(url, self._api_key)
        body, status_code = self._http.fetch(url, display_url=display_url)
        if status_code != _HTTP_OK:
            raise map_api_error(body, status_code)
        return decode(body)

    def program_list(self, version: str, area: str, service: str, day: str | date) -> ProgramList:
        """Call the Program List API: programs of a service on a day."""
        url = urls.program_list_url(self._base_url, version, area, service, day, api_key=self._api_key)
        return self._call(url, decode_program_list)

    def program_genre(
        self, version: str, area: str, service: str, genre: str, day: str | date
    ) -> ProgramList:
        """Call the Program Genre API: programs of a genre on a day."""
        url = urls.program_genre_url(
            self._base_url, version, area, service, genre, day, api_key=self._api_key
        )
        return self._call(url, decode_program_list)

    def program_info(self, version: str, area: str, service: str, program_id: str) -> DescriptionList:
        """Call the Program Info API: the description of one program."""
        url = urls.program_info_url(
            self._base_url, version, area, service, program_id, api_key=self._api_key
        )
        return self._call(url, decode_description_list)

    def now_on_air(self, version: str, area: str, service: str) -> NowOnAirList:
        """Call the Now On Air API: previous, present and following programs."""
        url = urls.now_on_air_url(self._base_url, version, area, service, api_key=self._api_key)
        return self._call(url, decode_now_on_air_list)


def new_client(api_key: str) -> NhkClient:
    """Return a client for the public API endpoint using `api_key`."""
    return NhkClient(api_key)
