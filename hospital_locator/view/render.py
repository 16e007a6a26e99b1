"""Presentation helpers shared by the CLI and the HTML finder page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from hospital_locator.geo.distance import distance_display
from hospital_locator.geo.maps import build_map_url
from hospital_locator.models import GeoPoint, Hospital
from hospital_locator.view.state import SearchState, ViewState

EMPTY_TIPS = (
    "Check if the pincode is entered correctly",
    "Search for nearby pincodes in your area",
    "Try a larger city or district pincode",
)


@dataclass(frozen=True)
class ResultRow:
    hospital: Hospital
    distance: Optional[str]
    map_url: str


def build_rows(hospitals: List[Hospital], user_location: Optional[GeoPoint]) -> List[ResultRow]:
    return [
        ResultRow(
            hospital=hospital,
            distance=distance_display(hospital, user_location),
            map_url=build_map_url(hospital, user_location),
        )
        for hospital in hospitals
    ]


def render_text(state: SearchState, user_location: Optional[GeoPoint] = None) -> str:
    view = state.view_state
    if view is ViewState.IDLE:
        return "Ready to Search\nEnter a pincode to find hospitals in your area."
    if view is ViewState.LOADING:
        return f"Searching for hospitals...\nLooking up hospitals in pincode {state.searched_pincode}"
    if view is ViewState.ERROR:
        return f"Search failed for pincode {state.searched_pincode}: {state.error}"
    if view is ViewState.EMPTY:
        lines = [
            "No Hospitals Found",
            f"We couldn't find any hospitals registered for pincode {state.searched_pincode}",
            "Try these tips:",
        ]
        lines.extend(f"  - {tip}" for tip in EMPTY_TIPS)
        return "\n".join(lines)

    lines = [f"{len(state.hospitals)} hospitals for pincode {state.searched_pincode}"]
    for row in build_rows(state.hospitals, user_location):
        hospital = row.hospital
        meta = hospital.pincode if row.distance is None else f"{hospital.pincode} | {row.distance}"
        lines.append("")
        lines.append(f"{hospital.id + 1}. {hospital.name}")
        lines.append(f"   {hospital.address}")
        lines.append(f"   {meta}")
        lines.append(f"   {row.map_url}")
    return "\n".join(lines)
