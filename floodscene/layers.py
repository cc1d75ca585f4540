"""Layer composition for the flood scene.

``compose_layers`` maps a UI snapshot and the configured feature sources to
an ordered list of layer descriptors:

  1. the photorealistic 3D tileset, which defines the terrain surface
  2. one draped GeoJSON layer per feature source (boundary, flood zones)

Draped layers are built by a single constructor parameterised by the source
and its maximum depth.  Every call builds fresh descriptors from the snapshot
it is given, so no layer can carry parameters from an earlier UI state.
"""

import copy
import logging
import math
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .color_scale import DEPTH_COLOR_SCALE, DepthColorScale
from .constants import (
    API_KEY_HEADER,
    BOUNDARY_DATA,
    BOUNDARY_LAYER_ID,
    BOUNDARY_MAX_DEPTH,
    DEPTH_PROPERTY,
    FLOOD_ZONE_DATA,
    FLOOD_ZONE_LAYER_ID,
    FLOOD_ZONE_MAX_DEPTH,
    TILESET_LAYER_ID,
    TILESET_OPERATION,
    TILESET_URL,
)
from .models import FeatureSource, FilterRange, LayerDescriptor, LayerStyle, UIState

logger = logging.getLogger(__name__)

BASEMAP_TYPE = "Tile3DLayer"
DRAPED_TYPE = "GeoJsonLayer"

DRAPED_PROPS = {
    "stroked": False,
    "filled": True,
    "pickable": True,
    "extensions": [
        {"type": "DataFilterExtension", "filterSize": 1},
        {"type": "TerrainExtension"},
    ],
}


def default_sources() -> List[FeatureSource]:
    """Boundary polygons first, then flood zones, each with its own depth cap."""
    return [
        FeatureSource(BOUNDARY_LAYER_ID, BOUNDARY_DATA, BOUNDARY_MAX_DEPTH),
        FeatureSource(FLOOD_ZONE_LAYER_ID, FLOOD_ZONE_DATA, FLOOD_ZONE_MAX_DEPTH),
    ]


# ── Per-feature accessors ───────────────────────────────────────────────

def feature_depth(feature: Dict[str, Any]) -> Optional[float]:
    """Return the feature's flood depth, or None when it has no usable value."""
    properties = feature.get("properties") or {}
    value = properties.get(DEPTH_PROPERTY)
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return value


def passes_filter(feature: Dict[str, Any], filter_range: FilterRange) -> bool:
    """Inclusive range test.  Features without a depth never pass."""
    depth = feature_depth(feature)
    return depth is not None and filter_range.contains(depth)


def elevation_for(feature: Dict[str, Any], style: LayerStyle) -> float:
    """Extrusion height: depth times the elevation scale, or flat."""
    depth = feature_depth(feature)
    if not style.extruded or depth is None:
        return 0.0
    return depth * style.elevation_scale


# ── Layer constructors ──────────────────────────────────────────────────

def filter_range_for(ui_state: UIState, max_depth: float) -> FilterRange:
    """``[threshold, max_depth]``, collapsed onto ``max_depth`` when the
    threshold lies above the layer's range."""
    low = min(ui_state.depth_threshold, max_depth)
    return FilterRange(low=low, high=max_depth)


def layer_style(ui_state: UIState, max_depth: float) -> LayerStyle:
    return LayerStyle(
        opacity=ui_state.opacity,
        extruded=ui_state.extruded,
        elevation_scale=ui_state.elevation_scale,
        filter_range=filter_range_for(ui_state, max_depth),
    )


def basemap_layer(tileset_url: str = TILESET_URL) -> LayerDescriptor:
    """The 3D tileset.  Carries the auth header name, never its value."""
    return LayerDescriptor(
        layer_id=TILESET_LAYER_ID,
        layer_type=BASEMAP_TYPE,
        data=tileset_url,
        props={
            "operation": TILESET_OPERATION,
            "authHeader": API_KEY_HEADER,
        },
    )


def draped_layer(source: FeatureSource, ui_state: UIState) -> LayerDescriptor:
    """GeoJSON layer draped on the terrain, filtered to the source's range."""
    if source.max_depth < 0:
        raise ValueError(f"{source.source_id}: max_depth must be >= 0")
    style = layer_style(ui_state, source.max_depth)
    return LayerDescriptor(
        layer_id=source.source_id,
        layer_type=DRAPED_TYPE,
        data=source.data,
        style=style,
        max_depth=source.max_depth,
        visible=ui_state.depth_threshold <= source.max_depth,
        props=copy.deepcopy(DRAPED_PROPS),
    )


def compose_layers(ui_state: UIState,
                   sources: Optional[Sequence[FeatureSource]] = None,
                   tileset_url: str = TILESET_URL) -> List[LayerDescriptor]:
    """Ordered layer list for one render: basemap, then draped layers."""
    if sources is None:
        sources = default_sources()

    layers = [basemap_layer(tileset_url)]
    seen = {layers[0].layer_id}
    for source in sources:
        if source.source_id in seen:
            raise ValueError(f"duplicate layer id: {source.source_id}")
        seen.add(source.source_id)
        layers.append(draped_layer(source, ui_state))
    return layers


# ── Materialisation ─────────────────────────────────────────────────────

def materialize(layer: LayerDescriptor, features: Iterable[Dict[str, Any]],
                scale: DepthColorScale = DEPTH_COLOR_SCALE) -> Dict[str, Any]:
    """Render-ready FeatureCollection for a draped layer.

    Features outside the filter range (or without a depth) are dropped.  Kept
    features are shallow copies with ``fill_color`` and ``elevation`` added
    to their properties; the input features are not modified.
    """
    if not layer.draped:
        raise ValueError(f"layer {layer.layer_id!r} has no feature style")

    kept = []
    if layer.visible:
        kept = [f for f in features if passes_filter(f, layer.style.filter_range)]
    colors = scale.colors_for([feature_depth(f) for f in kept])

    out = []
    for feature, rgb in zip(kept, colors):
        properties = dict(feature.get("properties") or {})
        properties["fill_color"] = list(rgb)
        properties["elevation"] = elevation_for(feature, layer.style)
        out.append({**feature, "properties": properties})

    logger.debug(f"Layer {layer.layer_id}: {len(out)} features in range "
                 f"{layer.style.filter_range.as_list()}")
    return {"type": "FeatureCollection", "features": out}


def tooltip_html(feature: Optional[Dict[str, Any]]) -> Optional[str]:
    """Hover text for a picked feature."""
    if not feature:
        return None
    depth = (feature.get("properties") or {}).get(DEPTH_PROPERTY)
    return (
        "<div><b>Flood Depth</b></div>\n"
        f"<div>{depth} meters</div>"
    )
