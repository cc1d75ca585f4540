"""Interactive state of a flood map: UI controls, camera and credits.

Data flows one way.  UI setters replace the UI snapshot; every render
composes layers from exactly one snapshot.  The camera and the credit line
are updated independently through their own entry points.
"""

import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .color_scale import DEPTH_COLOR_SCALE, DepthColorScale
from .constants import BACKGROUND_COLOR, CONTROLLER_OPTIONS, TILESET_URL
from .credits import CreditAggregator, TileLike
from .layers import compose_layers, default_sources, materialize
from .models import FeatureSource, LayerDescriptor, UIState, ViewState
from .sources import SourceCache
from .view import ViewController

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RenderFrame:
    """Everything the renderer needs for one tick."""
    layers: List[LayerDescriptor]
    view_state: ViewState
    view_revision: int
    credits: str
    ui_state: UIState

    def to_dict(self) -> dict:
        return {
            "layers": [layer.to_dict() for layer in self.layers],
            "viewState": self.view_state.to_dict(),
            "viewRevision": self.view_revision,
            "credits": self.credits,
            "ui": self.ui_state.to_dict(),
            "controller": dict(CONTROLLER_OPTIONS),
            "backgroundColor": BACKGROUND_COLOR,
        }


class FloodScene:
    """Holds the interactive state of one flood map."""

    def __init__(self, sources: Optional[Sequence[FeatureSource]] = None,
                 ui_state: Optional[UIState] = None,
                 view: Optional[ViewController] = None,
                 tileset_url: str = TILESET_URL,
                 color_scale: DepthColorScale = DEPTH_COLOR_SCALE):
        self.sources = list(sources) if sources is not None else default_sources()
        self.tileset_url = tileset_url
        self.color_scale = color_scale
        self.view = view or ViewController()
        self.credit_aggregator = CreditAggregator()
        self._ui_state = ui_state or UIState()
        self._source_cache = SourceCache()

    # ------------------------------------------------------------------
    # UI state
    # ------------------------------------------------------------------

    @property
    def ui_state(self) -> UIState:
        return self._ui_state

    def update_ui(self, **changes: Any) -> UIState:
        """Apply one or more UI field changes as a single new snapshot.

        Validation happens before anything is replaced, so a rejected change
        leaves the previous snapshot in place.
        """
        new_state = dataclasses.replace(self._ui_state, **changes)
        if new_state != self._ui_state:
            logger.info(f"UI state changed: {changes}")
        self._ui_state = new_state
        return new_state

    def set_opacity(self, opacity: float) -> UIState:
        return self.update_ui(opacity=float(opacity))

    def set_extruded(self, extruded: bool) -> UIState:
        return self.update_ui(extruded=bool(extruded))

    def set_elevation_scale(self, elevation_scale: float) -> UIState:
        return self.update_ui(elevation_scale=float(elevation_scale))

    def set_depth_threshold(self, depth_threshold: float) -> UIState:
        return self.update_ui(depth_threshold=float(depth_threshold))

    # ------------------------------------------------------------------
    # Camera and credits
    # ------------------------------------------------------------------

    def focus_on(self, lat: float, lng: float) -> ViewState:
        return self.view.focus_on(lat, lng)

    def reset_view(self) -> ViewState:
        return self.view.reset()

    def on_traversal_complete(self, selected_tiles: Iterable[TileLike]) -> str:
        return self.credit_aggregator.on_traversal_complete(selected_tiles)

    @property
    def credits(self) -> str:
        return self.credit_aggregator.credits

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def layers(self) -> List[LayerDescriptor]:
        return compose_layers(self._ui_state, self.sources, self.tileset_url)

    def render(self) -> RenderFrame:
        ui_state = self._ui_state
        return RenderFrame(
            layers=compose_layers(ui_state, self.sources, self.tileset_url),
            view_state=self.view.view_state,
            view_revision=self.view.revision,
            credits=self.credits,
            ui_state=ui_state,
        )

    def get_layer(self, layer_id: str) -> LayerDescriptor:
        for layer in self.layers():
            if layer.layer_id == layer_id:
                return layer
        raise KeyError(layer_id)

    def layer_features(self, layer_id: str) -> Dict[str, Any]:
        """Filtered, coloured features of a draped layer for the current UI."""
        return self.materialize_layer(self.get_layer(layer_id))

    def materialize_layer(self, layer: LayerDescriptor) -> Dict[str, Any]:
        """Filtered, coloured features for an already composed draped layer."""
        if not layer.draped:
            raise ValueError(f"layer {layer.layer_id!r} has no features")
        collection = self._source_cache.get(layer.data)
        return materialize(layer, collection.get("features", []), self.color_scale)

    def legend(self):
        return self.color_scale.legend()
