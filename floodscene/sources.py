"""Feature-collection loading.

Sources are referenced by URL, by filesystem path, or given inline as an
already-parsed FeatureCollection.  No validation happens here: HTTP and JSON
errors propagate to the caller.
"""

import json
import logging
import pathlib
from typing import Any, Dict, Union
from urllib.parse import urlparse

import requests

from .constants import DATA_DIR, HTTP_TIMEOUT

logger = logging.getLogger(__name__)

SourceRef = Union[str, pathlib.Path, Dict[str, Any]]


def resolve_path(ref: Union[str, pathlib.Path]) -> pathlib.Path:
    """Map a site-root reference like ``/zones.geojson`` into DATA_DIR."""
    path = pathlib.Path(ref)
    if path.exists():
        return path
    return pathlib.Path(DATA_DIR) / str(ref).lstrip("/")


def load_feature_collection(ref: SourceRef, timeout: float = HTTP_TIMEOUT) -> Dict[str, Any]:
    """Fetch and parse the feature collection behind *ref*."""
    if isinstance(ref, dict):
        return ref

    ref_str = str(ref)
    if urlparse(ref_str).scheme in ("http", "https"):
        logger.info(f"Fetching features from {ref_str}")
        response = requests.get(ref_str, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    else:
        path = resolve_path(ref)
        logger.info(f"Reading features from {path}")
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

    logger.info(f"Loaded {len(data.get('features', []))} features from {ref_str}")
    return data


class SourceCache:
    """Loads each source once per process."""

    def __init__(self) -> None:
        self._cache: Dict[str, Dict[str, Any]] = {}

    def get(self, ref: SourceRef) -> Dict[str, Any]:
        if isinstance(ref, dict):
            return ref
        key = str(ref)
        if key not in self._cache:
            self._cache[key] = load_feature_collection(ref)
        return self._cache[key]

    def invalidate(self) -> None:
        self._cache.clear()
