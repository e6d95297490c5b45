"""Client library for the NHK Program Guide API."""

from __future__ import annotations

from nhkguide.client import NhkClient, new_client
from nhkguide.errors import DecodeError, NhkError, TransportError, UpstreamApiError
from nhkguide.models import (
    ApiError,
    Area,
    Description,
    DescriptionList,
    Extras,
    Link,
    Logo,
    NowOnAir,
    NowOnAirList,
    Program,
    ProgramList,
    Service,
)

__all__ = [
    "ApiError",
    "Area",
    "DecodeError",
    "Description",
    "DescriptionList",
    "Extras",
    "Link",
    "Logo",
    "NhkClient",
    "NhkError",
    "NowOnAir",
    "NowOnAirList",
    "Program",
    "ProgramList",
    "Service",
    "TransportError",
    "UpstreamApiError",
    "new_client",
]
