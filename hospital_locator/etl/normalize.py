"""Utilities for transforming registry records into canonical hospitals."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from hospital_locator.models import Hospital

logger = logging.getLogger(__name__)

# Candidate upstream field names per attribute, tried left to right.
NAME_FIELDS = ("hospital_name", "name")
ADDRESS_FIELDS = ("_address_original_first_line", "_location", "address")
PINCODE_FIELDS = ("_pincode", "pincode")
COORDINATES_FIELDS = ("_location_coordinates",)
LATITUDE_FIELDS = ("latitude", "lat")
LONGITUDE_FIELDS = ("longitude", "lng", "lon")

UNKNOWN_NAME = "Unknown Hospital"
UNKNOWN_ADDRESS = "Address not available"


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def first_present(record: Dict[str, Any], fields: Iterable[str]) -> Optional[str]:
    for field in fields:
        value = _strip_or_none(record.get(field))
        if value is not None:
            return value
    return None


def split_coordinates(combined: str) -> Tuple[Optional[str], Optional[str]]:
    """Split a ``"<lat>,<lng>"`` string; a missing side comes back as None."""
    parts = combined.split(",")
    latitude = _strip_or_none(parts[0])
    longitude = _strip_or_none(parts[1]) if len(parts) > 1 else None
    return latitude, longitude


def resolve_coordinates(record: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    combined = first_present(record, COORDINATES_FIELDS)
    if combined is not None:
        return split_coordinates(combined)
    return first_present(record, LATITUDE_FIELDS), first_present(record, LONGITUDE_FIELDS)


def normalize_record(raw: Any, requested_pincode: str, ordinal: int) -> Hospital:
    record = raw if isinstance(raw, dict) else {}
    latitude, longitude = resolve_coordinates(record)
    return Hospital(
        id=ordinal,
        name=first_present(record, NAME_FIELDS) or UNKNOWN_NAME,
        address=first_present(record, ADDRESS_FIELDS) or UNKNOWN_ADDRESS,
        pincode=first_present(record, PINCODE_FIELDS) or requested_pincode,
        latitude=latitude,
        longitude=longitude,
    )


def normalize_records(payload: Any, requested_pincode: str) -> List[Hospital]:
    records = payload.get("records") if isinstance(payload, dict) else None
    if not isinstance(records, list):
        logger.warning("Registry payload has no records list. keys=%s", _preview_keys(payload))
        return []

    hospitals = [normalize_record(raw, requested_pincode, index) for index, raw in enumerate(records)]
    if records and isinstance(records[0], dict):
        logger.debug("First record keys: %s", list(records[0].keys())[:20])
    logger.info("Normalized %d hospitals for pincode=%s", len(hospitals), requested_pincode)
    return hospitals


def _preview_keys(payload: Any) -> List[str]:
    if isinstance(payload, dict):
        return list(payload.keys())[:10]
    return []
