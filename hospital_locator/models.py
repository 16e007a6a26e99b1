"""Core data models shared by the proxy, the normalizer and the views."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

# Leading decimal number, the part of a string a browser parseFloat would read.
NUMBER_PREFIX_REGEX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(slots=True)
class Hospital:
    """Canonical hospital record built from one upstream registry row.

    ``id`` is the record's position in the current response, not a durable key.
    Coordinates stay as strings; numeric checks happen where they are consumed.
    """

    id: int
    name: str
    address: str
    pincode: str
    latitude: Optional[str] = None
    longitude: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lng: float

    @classmethod
    def parse(cls, lat: Any, lng: Any) -> Optional["GeoPoint"]:
        """Build a point from raw values, or None when either is unusable."""
        lat_value = parse_coordinate(lat)
        lng_value = parse_coordinate(lng)
        if lat_value is None or lng_value is None:
            return None
        return cls(lat=lat_value, lng=lng_value)


def parse_coordinate(value: Any) -> Optional[float]:
    """Finite float from a raw coordinate, or None.

    Strings are read up to the end of their leading number, so "25.6N" gives
    25.6 and "2_5.6" gives 2.
    """
    if value is None:
        return None
    if isinstance(value, str):
        match = NUMBER_PREFIX_REGEX.match(value.strip())
        if match is None:
            return None
        value = match.group(0)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
