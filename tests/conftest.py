from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


def _logo(url: str) -> dict[str, str]:
    return {"url": url, "width": "100", "height": "50"}


@pytest.fixture
def program_payload() -> dict[str, Any]:
    """A single program as returned by the list/genre endpoints."""

    return {
        "id": "2024040112345",
        "event_id": "12345",
        "start_time": "2024-04-01T04:30:00+09:00",
        "end_time": "2024-04-01T05:00:00+09:00",
        "area": {"id": "130", "name": "東京"},
        "service": {
            "id": "g1",
            "name": "ＮＨＫ総合１",
            "logo_s": _logo("//www.nhk.or.jp/common/img/media/gtv-100x50.png"),
            "logo_m": _logo("//www.nhk.or.jp/common/img/media/gtv-200x100.png"),
            "logo_l": _logo("//www.nhk.or.jp/common/img/media/gtv-200x200.png"),
        },
        "title": "ＮＨＫニュース　おはよう日本",
        "subtitle": "最新ニュースと気象情報",
        "genres": ["0000", "0100"],
    }


@pytest.fixture
def description_payload(program_payload: dict[str, Any]) -> dict[str, Any]:
    """A program description as returned by the info endpoint."""

    return {
        **program_payload,
        "program_logo": _logo("//www.nhk.or.jp/ohayou/logo.png"),
        "program_url": "//www.nhk.or.jp/ohayou/",
        "episode_url": "",
        "hashtags": ["#おはよう日本", "#nhk"],
        "extras": {
            "ondemand_program": {"url": "//www.nhk-ondemand.jp/program/P201000000100000/", "title": "おはよう日本", "id": "P201000000100000"},
            "ondemand_episode": {"url": "", "title": "", "id": ""},
        },
    }


@pytest.fixture
def encode():
    """Return a helper that serializes a payload the way the API does."""

    def _encode(payload: Any) -> bytes:
        return json.dumps(payload, ensure_ascii=False).encode("utf-8")

    return _encode
