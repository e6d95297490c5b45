"""Pydantic models for NHK Program Guide API payloads.

All models are frozen and populated from JSON only. Unknown keys are ignored,
and keys that are missing or explicitly `null` fall back to their defaults:
empty strings, empty containers, or zero-valued nested objects. Timestamps
must carry a UTC offset.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator, model_validator

__all__ = [
    "ApiError",
    "Area",
    "Description",
    "DescriptionList",
    "Extras",
    "Link",
    "Logo",
    "NhkModel",
    "NowOnAir",
    "NowOnAirList",
    "Program",
    "ProgramList",
    "Service",
]


class NhkModel(BaseModel):
    """Base model for API payloads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Area(NhkModel):
    id: str = ""
    name: str = ""


class Logo(NhkModel):
    url: str = ""
    width: str = ""
    height: str = ""


class Service(NhkModel):
    id: str = ""
    name: str = ""
    logo_s: Logo = Field(default_factory=Logo)
    logo_m: Logo = Field(default_factory=Logo)
    logo_l: Logo = Field(default_factory=Logo)


class Link(NhkModel):
    url: str = ""
    title: str = ""
    id: str = ""


class Extras(NhkModel):
    """On-demand links attached to a program description."""

    ondemand_program: Link = Field(default_factory=Link)
    ondemand_episode: Link = Field(default_factory=Link)


class Program(NhkModel):
    """A single broadcast slot."""

    id: str = ""
    event_id: str = ""
    start_time: AwareDatetime | None = None
    end_time: AwareDatetime | None = None
    area: Area = Field(default_factory=Area)
    service: Service = Field(default_factory=Service)
    title: str = ""
    subtitle: str = ""
    genres: list[str] = Field(default_factory=list)

    @property
    def duration(self) -> timedelta | None:
        """Return the running time, or None when either bound is unknown."""
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time


class Description(Program):
    """Detailed program information returned by the info endpoint."""

    program_logo: Logo = Field(default_factory=Logo)
    program_url: str = ""
    episode_url: str = ""
    hashtags: list[str] = Field(default_factory=list)
    extras: Extras = Field(default_factory=Extras)


class NowOnAir(NhkModel):
    previous: Program = Field(default_factory=Program)
    present: Program = Field(default_factory=Program)
    following: Program = Field(default_factory=Program)


def _fill_null_values(value: Any, empty: Callable[[], Any]) -> Any:
    """Replace `null` values of a keyed collection with an empty value."""
    if isinstance(value, dict):
        return {key: empty() if item is None else item for key, item in value.items()}
    return value


class ProgramList(NhkModel):
    """Programs keyed by service id (list and genre endpoints)."""

    programs: dict[str, list[Program]] = Field(default_factory=dict, alias="list")

    @field_validator("programs", mode="before")
    @classmethod
    def _null_program_lists(cls, value: Any) -> Any:
        return _fill_null_values(value, list)


class DescriptionList(NhkModel):
    descriptions: dict[str, list[Description]] = Field(default_factory=dict, alias="list")

    @field_validator("descriptions", mode="before")
    @classmethod
    def _null_description_lists(cls, value: Any) -> Any:
        return _fill_null_values(value, list)


class NowOnAirList(NhkModel):
    now_on_air: dict[str, NowOnAir] = Field(default_factory=dict, alias="nowonair_list")

    @field_validator("now_on_air", mode="before")
    @classmethod
    def _null_triples(cls, value: Any) -> Any:
        return _fill_null_values(value, dict)


class ApiError(NhkModel):
    """Structured error envelope content returned by the API."""

    code: int = 0
    message: str = ""
