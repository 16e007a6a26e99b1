"""Google Maps deep links for hospital results."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

from hospital_locator.geo.distance import hospital_point
from hospital_locator.models import GeoPoint, Hospital

logger = logging.getLogger(__name__)

MAPS_BASE_URL = "https://www.google.com/maps"

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.".
_URI_COMPONENT_SAFE = "!~*'()"


def _fmt(value: float) -> str:
    return f"{value:.15g}"


def _pair(point: GeoPoint) -> str:
    return f"{_fmt(point.lat)},{_fmt(point.lng)}"


def directions_url(origin: GeoPoint, destination: GeoPoint) -> str:
    return f"{MAPS_BASE_URL}/dir/{_pair(origin)}/{_pair(destination)}"


def place_url(point: GeoPoint) -> str:
    return f"{MAPS_BASE_URL}?q={_pair(point)}"


def search_url(name: str, address: str) -> str:
    query = f"{name}, {address}"
    return f"{MAPS_BASE_URL}/search/{quote(query, safe=_URI_COMPONENT_SAFE)}"


def build_map_url(hospital: Hospital, user_location: Optional[GeoPoint] = None) -> str:
    """Pick the most specific link available for a hospital.

    Directions when both ends are known, a pin on the hospital when only its
    coordinates are usable, and a text search on name and address otherwise.
    """
    point = hospital_point(hospital)
    if point is not None:
        if user_location is not None:
            return directions_url(user_location, point)
        return place_url(point)

    logger.debug(
        "No usable coordinates for hospital id=%s (lat=%r lng=%r); using text search",
        hospital.id,
        hospital.latitude,
        hospital.longitude,
    )
    return search_url(hospital.name, hospital.address)
