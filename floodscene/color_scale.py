"""Flood depth to RGB colour mapping.

Clamped piecewise-linear interpolation over fixed depth breakpoints.  Depths
outside the domain saturate to the nearest endpoint colour.  Colour *i* sits
at breakpoint *i*; the final breakpoint shares the last colour, so depths
between the last two breakpoints render at full intensity.
"""

import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from .constants import DEPTH_BREAKPOINTS, DEPTH_COLORS
from .models import RGB

logger = logging.getLogger(__name__)


class DepthColorScale:
    """Immutable colour ramp over strictly increasing depth breakpoints."""

    def __init__(self, breakpoints: Sequence[float] = DEPTH_BREAKPOINTS,
                 colors: Sequence[Sequence[int]] = DEPTH_COLORS):
        stops = np.asarray(breakpoints, dtype=float)
        ramp = np.asarray(colors, dtype=float)
        if stops.ndim != 1 or len(stops) < 2:
            raise ValueError("a colour scale needs at least two breakpoints")
        if np.any(np.diff(stops) <= 0):
            raise ValueError(f"breakpoints must be strictly increasing: {list(breakpoints)}")
        if ramp.ndim != 2 or ramp.shape[1] != 3:
            raise ValueError("colours must be RGB triples")
        if len(ramp) not in (len(stops) - 1, len(stops)):
            raise ValueError(
                f"{len(stops)} breakpoints need {len(stops) - 1} or "
                f"{len(stops)} colours, got {len(ramp)}")

        # One colour per interval: the closing breakpoint repeats the last one
        if len(ramp) == len(stops) - 1:
            ramp = np.vstack([ramp, ramp[-1]])

        stops.setflags(write=False)
        ramp.setflags(write=False)
        self._stops = stops
        self._ramp = ramp
        self._colors: Tuple[RGB, ...] = tuple(tuple(int(c) for c in rgb) for rgb in colors)

    @property
    def domain(self) -> Tuple[float, float]:
        return float(self._stops[0]), float(self._stops[-1])

    def _interpolate(self, depths: np.ndarray) -> np.ndarray:
        lo, hi = self.domain
        # NaN has no position on the ramp; it takes the shallow end
        depths = np.where(np.isnan(depths), lo, depths)
        clamped = np.clip(depths, lo, hi)
        channels = [np.interp(clamped, self._stops, self._ramp[:, c]) for c in range(3)]
        return np.floor(np.stack(channels, axis=-1) + 0.5).astype(int)

    def color_for(self, depth: float) -> RGB:
        """Return the RGB colour for *depth*.  Total over all reals."""
        r, g, b = self._interpolate(np.asarray([float(depth)]))[0]
        return int(r), int(g), int(b)

    def colors_for(self, depths: Sequence[float]) -> List[RGB]:
        """Vectorised :meth:`color_for`."""
        if len(depths) == 0:
            return []
        rows = self._interpolate(np.asarray(depths, dtype=float))
        return [(int(r), int(g), int(b)) for r, g, b in rows]

    def legend(self) -> List[Tuple[str, RGB]]:
        """Legend swatches from shallow ("Low") to deep ("High")."""
        entries = []
        last = len(self._colors) - 1
        for i, rgb in enumerate(self._colors):
            lo = self._stops[i]
            if i + 1 < len(self._stops):
                label = f"{lo:g}-{self._stops[i + 1]:g}"
            else:
                label = f"{lo:g}"
            if i == 0:
                label = f"Low ({label})"
            elif i == last:
                label = f"High ({label})"
            entries.append((label, rgb))
        return entries


DEPTH_COLOR_SCALE = DepthColorScale()


def color_for(depth: float) -> RGB:
    """Colour for *depth* on the default flood-depth ramp."""
    if math.isnan(depth):
        logger.debug("Non-numeric depth %r mapped to shallow colour", depth)
    return DEPTH_COLOR_SCALE.color_for(depth)


def rgb_css(rgb: RGB) -> str:
    return f"rgb({rgb[0]},{rgb[1]},{rgb[2]})"
