"""Search state for the hospital finder views.

Every submission gets a sequence number. Only the response carrying the latest
number may touch the visible state; anything older is dropped, so a slow
response can never overwrite a newer search.
"""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import List, Optional

from hospital_locator.models import Hospital

logger = logging.getLogger(__name__)


class ViewState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class SearchState:
    pincode: str = ""
    searched_pincode: str = ""
    hospitals: List[Hospital] = field(default_factory=list)
    has_searched: bool = False
    is_loading: bool = False
    sequence: int = 0
    error: Optional[str] = None

    @property
    def view_state(self) -> ViewState:
        if self.is_loading:
            return ViewState.LOADING
        if not self.has_searched:
            return ViewState.IDLE
        if self.error:
            return ViewState.ERROR
        if self.hospitals:
            return ViewState.RESULTS
        return ViewState.EMPTY


class SearchController:
    """Drives a SearchState through submit/resolve/fail transitions."""

    def __init__(self) -> None:
        self._state = SearchState()
        self._lock = threading.Lock()

    @property
    def state(self) -> SearchState:
        with self._lock:
            return replace(self._state, hospitals=list(self._state.hospitals))

    @property
    def view_state(self) -> ViewState:
        with self._lock:
            return self._state.view_state

    def set_input(self, pincode: str) -> None:
        with self._lock:
            self._state.pincode = pincode

    def submit(self, pincode: Optional[str] = None) -> Optional[int]:
        """Start a search and return its sequence number, or None for blank input."""
        with self._lock:
            if pincode is not None:
                self._state.pincode = pincode
            value = self._state.pincode
            if not value.strip():
                return None

            self._state.sequence += 1
            self._state.is_loading = True
            self._state.has_searched = True
            self._state.searched_pincode = value
            self._state.error = None
            logger.debug("Search #%d submitted for pincode=%s", self._state.sequence, value)
            return self._state.sequence

    def resolve(self, sequence: int, hospitals: List[Hospital]) -> bool:
        with self._lock:
            if not self._is_current(sequence):
                return False
            self._state.hospitals = list(hospitals)
            self._state.is_loading = False
            return True

    def fail(self, sequence: int, message: str) -> bool:
        with self._lock:
            if not self._is_current(sequence):
                return False
            self._state.hospitals = []
            self._state.error = message
            self._state.is_loading = False
            return True

    def _is_current(self, sequence: int) -> bool:
        if sequence != self._state.sequence:
            logger.debug("Discarding stale response #%d (latest is #%d)", sequence, self._state.sequence)
            return False
        return True
