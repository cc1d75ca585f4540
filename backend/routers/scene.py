import asyncio
import logging
from typing import List

import requests
from fastapi import APIRouter, HTTPException

from backend.geocoder import GeocoderService
from backend.models import (
    CreditsResponse,
    FocusRequest,
    LegendEntry,
    TileModel,
    TraversalRequest,
    UIUpdateRequest,
    ViewStateResponse,
)
from backend.session import scene_session
from floodscene.models import Tile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/scene", tags=["scene"])

geocoder = GeocoderService()


def _view_response() -> ViewStateResponse:
    view = scene_session.scene.view
    state = view.view_state
    return ViewStateResponse(
        latitude=state.latitude,
        longitude=state.longitude,
        zoom=state.zoom,
        bearing=state.bearing,
        pitch=state.pitch,
        transition_duration_ms=state.transition_duration_ms,
        revision=view.revision,
    )


def _to_tile(model: TileModel) -> Tile:
    if model.copyright is not None or model.content is None:
        return Tile(copyright=model.copyright, tile_id=model.id)
    return Tile(copyright=model.content.gltf.asset.copyright, tile_id=model.id)


@router.get("")
async def get_frame():
    """Current render frame: ordered layers, view state and credits."""
    return scene_session.scene.render().to_dict()


@router.patch("/ui")
async def update_ui(request: UIUpdateRequest):
    """Change one or more UI controls and return the recomposed frame."""
    changes = request.model_dump(exclude_none=True)
    try:
        scene_session.scene.update_ui(**changes)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return scene_session.scene.render().to_dict()


@router.post("/focus", response_model=ViewStateResponse)
async def focus(request: FocusRequest):
    """Fly the camera to a coordinate pair or a geocoded address.

    A newer focus request always wins; the response carries the revision
    the renderer should animate towards.
    """
    latitude, longitude = request.latitude, request.longitude
    if latitude is None or longitude is None:
        try:
            point = await asyncio.to_thread(geocoder.locate, request.query)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        latitude, longitude = point["latitude"], point["longitude"]

    try:
        scene_session.scene.focus_on(latitude, longitude)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _view_response()


@router.post("/reset-view", response_model=ViewStateResponse)
async def reset_view():
    scene_session.scene.reset_view()
    return _view_response()


@router.post("/traversal", response_model=CreditsResponse)
async def traversal_complete(request: TraversalRequest):
    """Tile traversal callback from the renderer; rebuilds the credit line."""
    tiles = [_to_tile(t) for t in request.tiles]
    return CreditsResponse(credits=scene_session.scene.on_traversal_complete(tiles))


@router.get("/credits", response_model=CreditsResponse)
async def get_credits():
    return CreditsResponse(credits=scene_session.scene.credits)


@router.get("/legend", response_model=List[LegendEntry])
async def get_legend():
    return [
        LegendEntry(label=label, color=list(rgb))
        for label, rgb in scene_session.scene.legend()
    ]


@router.get("/layers/{layer_id}/features")
def get_layer_features(layer_id: str):
    """Features of a draped layer that pass the current depth filter.

    Uses ``def`` so a remote source fetch runs in the threadpool.
    """
    scene = scene_session.scene
    try:
        layer = scene.get_layer(layer_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown layer: {layer_id}")
    if not layer.draped:
        raise HTTPException(status_code=400, detail=f"Layer {layer_id} has no features")

    try:
        return scene.materialize_layer(layer)
    except (OSError, ValueError, requests.RequestException) as exc:
        logger.exception("Failed to load features for layer %s", layer_id)
        raise HTTPException(status_code=502, detail=f"Feature source failed: {exc}")
