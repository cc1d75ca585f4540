from pydantic import BaseModel, Field, model_validator
from typing import List, Optional


class UIUpdateRequest(BaseModel):
    opacity: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    extruded: Optional[bool] = None
    elevation_scale: Optional[float] = Field(default=None, ge=0.0)
    depth_threshold: Optional[float] = None


class FocusRequest(BaseModel):
    """Either a coordinate pair or an address to geocode."""
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    query: Optional[str] = None

    @model_validator(mode="after")
    def _check_target(self):
        has_point = self.latitude is not None and self.longitude is not None
        if not has_point and not self.query:
            raise ValueError("provide latitude and longitude, or a query")
        return self


class TileAsset(BaseModel):
    copyright: Optional[str] = None


class TileGltf(BaseModel):
    asset: TileAsset = TileAsset()


class TileContent(BaseModel):
    gltf: TileGltf = TileGltf()


class TileModel(BaseModel):
    id: Optional[str] = None
    copyright: Optional[str] = None
    content: Optional[TileContent] = None


class TraversalRequest(BaseModel):
    tiles: List[TileModel] = []


class GeocodeResponse(BaseModel):
    latitude: float
    longitude: float
    display_name: Optional[str] = None


class ViewStateResponse(BaseModel):
    latitude: float
    longitude: float
    zoom: float
    bearing: float
    pitch: float
    transition_duration_ms: Optional[int] = None
    revision: int


class CreditsResponse(BaseModel):
    credits: str


class LegendEntry(BaseModel):
    label: str
    color: List[int]
