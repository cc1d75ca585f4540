"""FloodScene package: flood depth layers draped over a photorealistic 3D basemap.

Import constants FIRST so environment overrides and logging are set up
before any other module reads them.
"""

from floodscene import constants as _constants  # noqa: F401

from floodscene.color_scale import DepthColorScale, color_for
from floodscene.credits import CreditAggregator, aggregate_credits
from floodscene.layers import compose_layers, draped_layer
from floodscene.models import FeatureSource, LayerDescriptor, Tile, UIState, ViewState
from floodscene.scene import FloodScene, RenderFrame
from floodscene.view import ViewController
