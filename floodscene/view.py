"""Camera state and focus transitions."""

import logging
import math
from typing import Optional

from .constants import FOCUS_TRANSITION_MS, FOCUS_ZOOM, INITIAL_VIEW_STATE
from .models import ViewState

logger = logging.getLogger(__name__)


def initial_view_state() -> ViewState:
    return ViewState(**INITIAL_VIEW_STATE)


class ViewController:
    """Owns the current :class:`ViewState`.

    A focus request replaces the whole view state.  Requests are not queued:
    the most recent one is authoritative and ``revision`` is bumped so a
    renderer knows to restart any interpolation still in flight.
    """

    def __init__(self, initial: Optional[ViewState] = None,
                 focus_zoom: float = FOCUS_ZOOM,
                 transition_ms: int = FOCUS_TRANSITION_MS):
        if transition_ms <= 0:
            raise ValueError("focus transitions need a positive duration")
        self._initial = initial or initial_view_state()
        self._view_state = self._initial
        self._focus_zoom = focus_zoom
        self._transition_ms = transition_ms
        self._revision = 0

    @property
    def view_state(self) -> ViewState:
        return self._view_state

    @property
    def revision(self) -> int:
        return self._revision

    def focus_on(self, lat: float, lng: float) -> ViewState:
        """Fly the camera to (*lat*, *lng*), looking straight down."""
        lat, lng = float(lat), float(lng)
        if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
            raise ValueError(f"latitude out of range: {lat}")
        if not (math.isfinite(lng) and -180.0 <= lng <= 180.0):
            raise ValueError(f"longitude out of range: {lng}")

        self._view_state = ViewState(
            latitude=lat,
            longitude=lng,
            zoom=self._focus_zoom,
            bearing=0.0,
            pitch=0.0,
            transition_duration_ms=self._transition_ms,
        )
        self._revision += 1
        logger.info(f"Camera focus -> ({lat:.5f}, {lng:.5f}), revision {self._revision}")
        return self._view_state

    def reset(self) -> ViewState:
        """Jump back to the initial view without a transition."""
        self._view_state = self._initial
        self._revision += 1
        return self._view_state
