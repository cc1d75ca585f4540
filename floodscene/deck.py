"""Pydeck rendering of a flood scene.

Turns a :class:`~floodscene.scene.RenderFrame` into a ``pdk.Deck``.  Draped
layers are handed over already filtered and coloured, so the browser only
draws what the filter range admits.  This is also the only place the
tileset API key is read.
"""

import logging
import os
import pathlib
from typing import List, Optional

import pydeck as pdk

from .color_scale import rgb_css
from .constants import (API_KEY_ENV, API_KEY_HEADER, BACKGROUND_COLOR, CONTROLLER_OPTIONS,
                        DEPTH_PROPERTY)
from .layers import tooltip_html
from .models import LayerDescriptor
from .scene import FloodScene, RenderFrame

logger = logging.getLogger(__name__)

# pydeck fills "{flood_depth}" from the hovered feature's properties
TOOLTIP = {"html": tooltip_html({"properties": {DEPTH_PROPERTY: "{" + DEPTH_PROPERTY + "}"}})}

# deck.gl still ships the terrain extension under its experimental name
EXTENSION_TYPES = {"TerrainExtension": "_TerrainExtension"}


def _extensions(layer: LayerDescriptor) -> List[dict]:
    """Layer extensions as pydeck JSON-converter class references."""
    extensions = []
    for ext in layer.props.get("extensions", []):
        options = {k: v for k, v in ext.items() if k != "type"}
        extensions.append({"@@type": EXTENSION_TYPES.get(ext["type"], ext["type"]), **options})
    return extensions


def clear_color(hex_color: str) -> List[float]:
    """``#rrggbb`` as the normalised RGBA quadruple WebGL clears to."""
    value = hex_color.lstrip("#")
    return [int(value[i:i + 2], 16) / 255 for i in (0, 2, 4)] + [1.0]


def _basemap(layer: LayerDescriptor, api_key: Optional[str]) -> pdk.Layer:
    load_options = {}
    if api_key:
        load_options = {"fetch": {"headers": {API_KEY_HEADER: api_key}}}
    else:
        logger.warning(f"{API_KEY_ENV} is not set; the 3D tileset will not load")
    return pdk.Layer(
        layer.layer_type,
        data=layer.data,
        id=layer.layer_id,
        load_options=load_options,
        operation=layer.props.get("operation"),
    )


def _draped(layer: LayerDescriptor, scene: FloodScene) -> pdk.Layer:
    features = scene.materialize_layer(layer)
    return pdk.Layer(
        layer.layer_type,
        data=features,
        id=layer.layer_id,
        visible=layer.visible,
        stroked=layer.props.get("stroked", False),
        filled=layer.props.get("filled", True),
        pickable=layer.props.get("pickable", True),
        opacity=layer.style.opacity,
        extruded=layer.style.extruded,
        get_fill_color="properties.fill_color",
        get_elevation="properties.elevation",
        elevation_scale=1,
        extensions=_extensions(layer),
        get_filter_value=f"properties.{DEPTH_PROPERTY}",
        filter_range=layer.style.filter_range.as_list(),
    )


def legend_html(scene: FloodScene, credits: str = "") -> str:
    """Legend panel plus the attribution line."""
    swatches = "".join(
        f'<div style="background-color:{rgb_css(rgb)};width:20px;height:20px" '
        f'title="{label}"></div>'
        for label, rgb in scene.legend()
    )
    return (
        '<div style="background-color:white;padding:10px;border-radius:5px">'
        '<div style="margin-bottom:10px;font-weight:bold">Flood Depth Legend</div>'
        '<div style="display:flex;align-items:center">'
        f'<span>Low</span><div style="display:flex;margin:0 10px">{swatches}</div>'
        '<span>High</span></div>'
        f'<div style="margin-top:10px;font-size:10px">{credits}</div>'
        '</div>'
    )


def build_deck(scene: FloodScene, frame: Optional[RenderFrame] = None,
               api_key: Optional[str] = None) -> pdk.Deck:
    """Build the deck for *frame* (or a fresh render of *scene*)."""
    frame = frame or scene.render()
    if api_key is None:
        api_key = os.environ.get(API_KEY_ENV)

    layers: List[pdk.Layer] = []
    for layer in frame.layers:
        if layer.draped:
            layers.append(_draped(layer, scene))
        else:
            layers.append(_basemap(layer, api_key))

    view = frame.view_state
    view_kwargs = {}
    if view.transition_duration_ms:
        view_kwargs["transitionDuration"] = view.transition_duration_ms

    return pdk.Deck(
        layers=layers,
        initial_view_state=pdk.ViewState(
            latitude=view.latitude,
            longitude=view.longitude,
            zoom=view.zoom,
            bearing=view.bearing,
            pitch=view.pitch,
            **view_kwargs,
        ),
        views=[pdk.View("MapView", controller=dict(CONTROLLER_OPTIONS))],
        map_style=None,
        map_provider=None,
        parameters={"clearColor": clear_color(BACKGROUND_COLOR)},
        tooltip=TOOLTIP,
        description=legend_html(scene, frame.credits),
    )


def write_html(scene: FloodScene, output: pathlib.Path,
               api_key: Optional[str] = None) -> pathlib.Path:
    """Write a standalone HTML page for the current scene state.

    The credit line reflects the last traversal fed to
    :meth:`FloodScene.on_traversal_complete`.  A static page has no live
    tileset traversal behind it, so the line is empty unless the caller
    reports the selected tiles before writing (the CLI does not).
    """
    output = pathlib.Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    deck = build_deck(scene, api_key=api_key)
    deck.to_html(str(output), open_browser=False, css_background_color=BACKGROUND_COLOR)
    logger.info(f"Scene written to {output}")
    return output
