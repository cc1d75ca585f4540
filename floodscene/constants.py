"""Configuration constants, paths, and logging setup."""

import os
import pathlib
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_float(name: str, default: float) -> float:
    """Read a float override from the environment, falling back to *default*."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return float(raw)


# ── 3D basemap ──────────────────────────────────────────────────────────
TILESET_URL = os.environ.get(
    "FLOODSCENE_TILESET_URL",
    "https://tile.googleapis.com/v1/3dtiles/root.json",
)
TILESET_LAYER_ID = "google-3d-tiles"
TILESET_OPERATION = "terrain+draw"

# The key itself is only read at the renderer boundary (see deck.py)
API_KEY_ENV = "GOOGLE_MAPS_API_KEY"
API_KEY_HEADER = "X-GOOG-API-KEY"

# ── Flood depth sources ─────────────────────────────────────────────────
# Upper filter bounds per hazard category.  The boundary layer is resolved
# at a much shallower range than the flood zones.
FLOOD_ZONE_LAYER_ID = "flood_zones"
FLOOD_ZONE_DATA = os.environ.get("FLOODSCENE_FLOOD_ZONE_DATA", "/tuflow_zones.geojson")
FLOOD_ZONE_MAX_DEPTH = _env_float("FLOODSCENE_FLOOD_ZONE_MAX_DEPTH", 120.0)

BOUNDARY_LAYER_ID = "project_boundary"
BOUNDARY_DATA = os.environ.get("FLOODSCENE_BOUNDARY_DATA", "/project_boundary.geojson")
BOUNDARY_MAX_DEPTH = _env_float("FLOODSCENE_BOUNDARY_MAX_DEPTH", 20.0)

DEPTH_PROPERTY = "flood_depth"

HTTP_TIMEOUT = _env_float("FLOODSCENE_HTTP_TIMEOUT", 30.0)

# ── Depth colour ramp (RdPu) ────────────────────────────────────────────
DEPTH_BREAKPOINTS = (0, 15, 30, 45, 60, 75, 90, 105, 120)
DEPTH_COLORS = (
    (255, 247, 243),
    (253, 224, 221),
    (252, 197, 192),
    (250, 159, 181),
    (247, 104, 161),
    (221, 52, 151),
    (174, 1, 126),
    (122, 1, 119),
)

# ── UI defaults ─────────────────────────────────────────────────────────
DEFAULT_OPACITY = 0.2
DEFAULT_EXTRUDED = False
DEFAULT_ELEVATION_SCALE = 0.5
DEFAULT_DEPTH_THRESHOLD = 0.0

# ── Camera ──────────────────────────────────────────────────────────────
INITIAL_VIEW_STATE = {
    "latitude": 34.26173,
    "longitude": -118.75033,
    "zoom": 15,
    "bearing": 0,
    "pitch": 0,
}
FOCUS_ZOOM = 17.5
FOCUS_TRANSITION_MS = 1000
CONTROLLER_OPTIONS = {"touchRotate": True, "inertia": 250}
BACKGROUND_COLOR = "#061714"

# Configure base paths
BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
# Site-root references such as "/tuflow_zones.geojson" resolve against DATA_DIR
DATA_DIR = pathlib.Path(os.environ.get("FLOODSCENE_DATA_DIR", BASE_DIR / "data"))
OUTPUT_DIR = BASE_DIR / "output"

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
