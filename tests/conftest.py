"""
Shared fixtures: small inline feature collections and a fresh scene.
"""

import pytest

from floodscene.models import FeatureSource
from floodscene.scene import FloodScene


def make_feature(depth=None, name="zone", **extra):
    properties = {"name": name, **extra}
    if depth is not None:
        properties["flood_depth"] = depth
    return {
        "type": "Feature",
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[-118.75, 34.26], [-118.74, 34.26],
                             [-118.74, 34.27], [-118.75, 34.26]]],
        },
        "properties": properties,
    }


def make_collection(*depths):
    return {
        "type": "FeatureCollection",
        "features": [make_feature(d, name=f"f{i}") for i, d in enumerate(depths)],
    }


@pytest.fixture
def boundary_data():
    return make_collection(5, 10, 15, 20, 21)


@pytest.fixture
def flood_zone_data():
    return make_collection(0, 25, 49.9, 50, 80, 120, 130)


@pytest.fixture
def sources(boundary_data, flood_zone_data):
    return [
        FeatureSource("project_boundary", boundary_data, 20),
        FeatureSource("flood_zones", flood_zone_data, 120),
    ]


@pytest.fixture
def scene(sources):
    return FloodScene(sources=sources)
