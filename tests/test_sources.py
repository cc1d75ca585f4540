"""
Feature-collection loader tests.
"""

import json

import pytest
import requests

import floodscene.sources as sources_mod
from floodscene.sources import SourceCache, load_feature_collection, resolve_path

COLLECTION = {"type": "FeatureCollection", "features": []}


class FakeResponse:

    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


def test_inline_collection_returned_as_is():
    assert load_feature_collection(COLLECTION) is COLLECTION


def test_local_file(tmp_path):
    path = tmp_path / "zones.geojson"
    path.write_text(json.dumps(COLLECTION))
    assert load_feature_collection(path) == COLLECTION


def test_site_root_reference_resolves_into_data_dir(tmp_path, monkeypatch):
    (tmp_path / "tuflow_zones.geojson").write_text(json.dumps(COLLECTION))
    monkeypatch.setattr(sources_mod, "DATA_DIR", tmp_path)
    assert resolve_path("/tuflow_zones.geojson") == tmp_path / "tuflow_zones.geojson"
    assert load_feature_collection("/tuflow_zones.geojson") == COLLECTION


def test_url_fetch(monkeypatch):
    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        return FakeResponse(COLLECTION)

    monkeypatch.setattr(sources_mod.requests, "get", fake_get)
    assert load_feature_collection("https://example.com/zones.geojson") == COLLECTION
    assert seen["url"] == "https://example.com/zones.geojson"


def test_http_error_propagates(monkeypatch):
    monkeypatch.setattr(sources_mod.requests, "get",
                        lambda url, timeout: FakeResponse({}, status=500))
    with pytest.raises(requests.HTTPError):
        load_feature_collection("https://example.com/zones.geojson")


def test_malformed_file_propagates(tmp_path):
    path = tmp_path / "bad.geojson"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_feature_collection(path)


def test_cache_invalidate(tmp_path):
    path = tmp_path / "zones.geojson"
    path.write_text(json.dumps(COLLECTION))
    cache = SourceCache()
    first = cache.get(str(path))
    assert cache.get(str(path)) is first
    cache.invalidate()
    assert cache.get(str(path)) is not first
