"""Great-circle distance helpers."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from hospital_locator.models import GeoPoint, Hospital

EARTH_RADIUS_KM = 6371.0


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two points, in kilometres."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lng - a.lng)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _round_half_up(value: float, places: int) -> str:
    # Ties round away from zero on the exact binary value, so 1.25 -> 1.3 but 2.345 -> 2.3.
    return str(Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def format_distance(km: float) -> str:
    if km < 1:
        return f"{_round_half_up(km * 1000, 0)} m away"
    return f"{_round_half_up(km, 1)} km away"


def hospital_point(hospital: Hospital) -> Optional[GeoPoint]:
    return GeoPoint.parse(hospital.latitude, hospital.longitude)


def distance_display(hospital: Hospital, user_location: Optional[GeoPoint]) -> Optional[str]:
    """Distance label for a result row, or None when it cannot be computed."""
    if user_location is None:
        return None
    point = hospital_point(hospital)
    if point is None:
        return None
    return format_distance(distance_km(user_location, point))
