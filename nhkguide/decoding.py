"""Decoders for buffered API response bodies.

Success bodies are validated against the result models. Failure bodies are
inspected for the `{"error": {"code": ..., "message": ...}}` envelope and
turned into an `UpstreamApiError`.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from loguru import logger
from pydantic import Field, ValidationError

from nhkguide.errors import DecodeError, UpstreamApiError
from nhkguide.models import ApiError, DescriptionList, NhkModel, NowOnAirList, ProgramList

__all__ = [
    "decode_description_list",
    "decode_now_on_air_list",
    "decode_program_list",
    "map_api_error",
]

log = logger.bind(module="decoding")

ModelT = TypeVar("ModelT", bound=NhkModel)


class _ErrorEnvelope(NhkModel):
    error: ApiError | None = Field(default=None)


def _load_json(body: bytes, *, status_code: int | None = None) -> Any:
    if not body:
        raise DecodeError("Invalid JSON response: body is empty", status_code=status_code)
    try:
        return json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"Invalid JSON response: {exc}", status_code=status_code) from exc


def _decode(model: type[ModelT], body: bytes, *, status_code: int | None = None) -> ModelT:
    payload = _load_json(body, status_code=status_code)
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Invalid {model.__name__} response: expected a JSON object, got {type(payload).__name__}",
            status_code=status_code,
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"Invalid {model.__name__} response: {exc}", status_code=status_code) from exc


def decode_program_list(body: bytes) -> ProgramList:
    """Decode the body of a list or genre endpoint response."""
    return _decode(ProgramList, body)


def decode_description_list(body: bytes) -> DescriptionList:
    """Decode the body of an info endpoint response."""
    return _decode(DescriptionList, body)


def decode_now_on_air_list(body: bytes) -> NowOnAirList:
    """Decode the body of a now-on-air endpoint response."""
    return _decode(NowOnAirList, body)


def map_api_error(body: bytes, status_code: int) -> UpstreamApiError:
    """Build the error for a non-200 response.

    A JSON object without an `"error"` key yields an error carrying only the
    status code. A body that is not a JSON object, or whose `"error"` value is
    malformed, raises `DecodeError` instead.
    """
    envelope = _decode(_ErrorEnvelope, body, status_code=status_code)
    error = UpstreamApiError(status_code, envelope.error)
    log.info("NHK API returned an error: {}", error)
    return error
