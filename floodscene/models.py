"""Data classes shared by the scene pipeline."""

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple, Union

from .constants import (
    DEFAULT_DEPTH_THRESHOLD,
    DEFAULT_ELEVATION_SCALE,
    DEFAULT_EXTRUDED,
    DEFAULT_OPACITY,
)

RGB = Tuple[int, int, int]


def _require_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")


@dataclass(frozen=True)
class ViewState:
    """Camera state handed to the renderer.  Replaced wholesale, never merged."""
    latitude: float
    longitude: float
    zoom: float
    bearing: float = 0.0
    pitch: float = 0.0
    transition_duration_ms: Optional[int] = None

    def to_dict(self) -> dict:
        """deck.gl-style camelCase view state."""
        data = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "zoom": self.zoom,
            "bearing": self.bearing,
            "pitch": self.pitch,
        }
        if self.transition_duration_ms:
            data["transitionDuration"] = self.transition_duration_ms
        return data


@dataclass(frozen=True)
class UIState:
    """Snapshot of the user controls.  A new snapshot is built on every change."""
    opacity: float = DEFAULT_OPACITY
    extruded: bool = DEFAULT_EXTRUDED
    elevation_scale: float = DEFAULT_ELEVATION_SCALE
    depth_threshold: float = DEFAULT_DEPTH_THRESHOLD

    def __post_init__(self):
        _require_finite("opacity", self.opacity)
        _require_finite("elevation_scale", self.elevation_scale)
        _require_finite("depth_threshold", self.depth_threshold)
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"opacity must be within [0, 1], got {self.opacity}")
        if self.elevation_scale < 0.0:
            raise ValueError(f"elevation_scale must be >= 0, got {self.elevation_scale}")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class FilterRange:
    """Inclusive depth interval; features outside it are not rendered."""
    low: float
    high: float

    def __post_init__(self):
        if self.low > self.high:
            raise ValueError(f"filter range low ({self.low}) exceeds high ({self.high})")

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def as_list(self) -> List[float]:
        return [self.low, self.high]


@dataclass(frozen=True)
class LayerStyle:
    opacity: float
    extruded: bool
    elevation_scale: float
    filter_range: FilterRange


@dataclass(frozen=True)
class FeatureSource:
    """A draped feature collection and the top of its hazard depth range."""
    source_id: str
    data: Union[str, Dict[str, Any]]
    max_depth: float


@dataclass(frozen=True)
class LayerDescriptor:
    """Declarative description of one renderer layer.

    ``style`` is ``None`` for the basemap, which takes no UI parameters.
    ``props`` holds renderer-specific static options (layer extensions,
    stroke flags, the tileset operation).
    """
    layer_id: str
    layer_type: str
    data: Union[str, Dict[str, Any]]
    style: Optional[LayerStyle] = None
    max_depth: Optional[float] = None
    visible: bool = True
    props: Dict[str, Any] = field(default_factory=dict)

    @property
    def draped(self) -> bool:
        return self.style is not None

    def to_dict(self) -> dict:
        """JSON form consumed by a browser-side deck.gl renderer."""
        data = {
            "id": self.layer_id,
            "type": self.layer_type,
            "data": self.data,
            "visible": self.visible,
        }
        if self.style is not None:
            data.update({
                "opacity": self.style.opacity,
                "extruded": self.style.extruded,
                "elevationScale": self.style.elevation_scale,
                "filterRange": self.style.filter_range.as_list(),
                "maxDepth": self.max_depth,
            })
        data.update(self.props)
        return data


@dataclass
class Tile:
    """A selected tile from a traversal; only its attribution matters here."""
    copyright: Optional[str] = None
    tile_id: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict) -> "Tile":
        """Build from a 3D-tiles tile dict (``content.gltf.asset.copyright``).

        A flat ``{"copyright": ...}`` dict is accepted too.
        """
        if "copyright" in raw:
            return cls(copyright=raw.get("copyright"), tile_id=raw.get("id"))
        asset = (((raw.get("content") or {}).get("gltf") or {}).get("asset") or {})
        return cls(copyright=asset.get("copyright"), tile_id=raw.get("id"))
