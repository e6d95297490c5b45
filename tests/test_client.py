from __future__ import annotations

import threading
from datetime import date
from typing import Any, Callable

import httpx
import pytest

from nhkguide import NhkClient, new_client
from nhkguide.config import Settings
from nhkguide.errors import DecodeError, NhkError, TransportError, UpstreamApiError
from nhkguide.urls import DEFAULT_BASE_URL

INVALID_PARAMETERS = {"error": {"code": 1, "message": "Invalid parameters"}}


def _client(handler: Callable[[httpx.Request], httpx.Response], api_key: str = "testApikey") -> NhkClient:
    return NhkClient(api_key, base_url="http://api.example.local", transport=httpx.MockTransport(handler))


def test_new_client_stores_key_and_uses_public_endpoint() -> None:
    client = new_client("testApikey")
    assert client.api_key == "testApikey"
    assert client.base_url == DEFAULT_BASE_URL
    assert "testApikey" not in repr(client)


def test_client_is_immutable() -> None:
    client = new_client("testApikey")
    with pytest.raises(AttributeError):
        client.api_key = "other"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        client.extra = 1  # type: ignore[attr-defined]


def test_program_list_sends_key_and_decodes(program_payload: dict[str, Any]) -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, json={"list": {"g1": [program_payload]}}, request=request)

    result = _client(handler).program_list("v1", "130", "g1", date(2024, 4, 1))
    assert seen[0].path == "/v1/pg/list/130/g1/2024-04-01.json"
    assert seen[0].params["key"] == "testApikey"
    assert result.programs["g1"][0].title == program_payload["title"]


def test_program_genre_uses_genre_path(program_payload: dict[str, Any]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/pg/genre/130/e1/0000/2024-04-01.json"
        return httpx.Response(200, json={"list": {"e1": [program_payload]}}, request=request)

    result = _client(handler).program_genre("v1", "130", "e1", "0000", "2024-04-01")
    assert len(result.programs["e1"]) == 1


def test_program_info_decodes_descriptions(description_payload: dict[str, Any]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/pg/info/130/g1/2024040112345.json"
        return httpx.Response(200, json={"list": {"g1": [description_payload]}}, request=request)

    result = _client(handler).program_info("v1", "130", "g1", "2024040112345")
    assert result.descriptions["g1"][0].program_url == "//www.nhk.or.jp/ohayou/"


def test_now_on_air_decodes_triple(program_payload: dict[str, Any]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/pg/now/130/g1.json"
        return httpx.Response(200, json={"nowonair_list": {"g1": {"present": program_payload}}}, request=request)

    result = _client(handler).now_on_air("v1", "130", "g1")
    assert result.now_on_air["g1"].present.id == "2024040112345"
    assert result.now_on_air["g1"].following.id == ""


def test_out_of_range_date_yields_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json=INVALID_PARAMETERS, request=request)

    with pytest.raises(UpstreamApiError) as excinfo:
        _client(handler).program_list("v1", "130", "g1", "2001-01-01")
    assert str(excinfo.value) == (
        "An error occurred during calling NHK API. [status: 404][code: 1][message: Invalid parameters]"
    )


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.program_genre("v1", "130", "g1", "0000", "2001-01-01"),
        lambda c: c.program_info("v1", "130", "g1", "0000000000000"),
        lambda c: c.now_on_air("v1", "130", "00"),
    ],
)
def test_every_endpoint_maps_error_status(call: Callable[[NhkClient], Any]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={}, request=request)

    with pytest.raises(UpstreamApiError, match=r"^An error occurred during calling NHK API\. \[status: 400\]$"):
        call(_client(handler))


def test_non_json_error_body_yields_decode_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, content=b"<html>Bad Gateway</html>", request=request)

    with pytest.raises(DecodeError) as excinfo:
        _client(handler).now_on_air("v1", "130", "g1")
    assert excinfo.value.status_code == 502


def test_malformed_success_body_yields_decode_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b'{"list": {"g1": [', request=request)

    with pytest.raises(DecodeError):
        _client(handler).program_list("v1", "130", "g1", "2024-04-01")


def test_connection_failure_yields_transport_error_without_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(TransportError) as excinfo:
        _client(handler, api_key="s3cret").now_on_air("v1", "130", "g1")
    assert excinfo.value.url == "http://api.example.local/v1/pg/now/130/g1.json?key=***"
    assert isinstance(excinfo.value, NhkError)


@pytest.mark.parametrize("base_url", ["not-a-host", "http://api..nhk.or.jp"])
def test_malformed_base_url_yields_transport_error(base_url: str) -> None:
    client = NhkClient("testApikey", base_url=base_url)
    with pytest.raises(TransportError):
        client.now_on_air("v1", "130", "g1")


def test_client_can_be_shared_between_threads(program_payload: dict[str, Any]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        service = request.url.path.split("/")[-1].removesuffix(".json")
        return httpx.Response(200, json={"nowonair_list": {service: {"present": program_payload}}}, request=request)

    client = _client(handler)
    results: dict[str, str] = {}
    errors: list[BaseException] = []

    def worker(service: str) -> None:
        try:
            results[service] = client.now_on_air("v1", "130", service).now_on_air[service].present.id
        except BaseException as exc:  # pragma: no cover - reported below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(svc,)) for svc in ("g1", "e1", "s1", "s3")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    assert results == {svc: "2024040112345" for svc in ("g1", "e1", "s1", "s3")}


def test_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NHK_API_KEY", raising=False)
    settings = Settings(_env_file=None, api_key="k", base_url="http://other.local/", timeout_seconds=3)
    client = NhkClient.from_settings(settings)
    assert client.api_key == "k"
    assert client.base_url == "http://other.local"

    with pytest.raises(ValueError, match="NHK_API_KEY"):
        NhkClient.from_settings(Settings(_env_file=None))
