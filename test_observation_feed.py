"""Observation feed tests — local JSON, mocked HTTP, overlay provider."""

import json
from datetime import datetime

import httpx
import pandas as pd
import pytest

from data_fetch.observation_feed import (
    ObservationFeedError,
    ObservationOceanProvider,
    load_observations,
    normalize_rows,
)
from data_fetch.ocean_provider import SyntheticOceanProvider
from models.domain import Coordinate

WHEN = datetime(2025, 10, 15)

ROWS = [
    {"lat": 9.5, "lon": 75.5, "depth": 35, "time": "2025-10-14T00:00:00Z", "do_min": 2.1, "status": "ok"},
    {"Latitude": 15.0, "Lon": 73.0, "Depth": 0, "timestamp": "2025-10-14T00:00:00Z", "o2": 5.8},
    {"latitude": 12.0, "longitude": None, "o2": 6.0},
    "not a row",
]


@pytest.fixture(autouse=True)
def _clear_feed_cache():
    load_observations.cache_clear()
    yield
    load_observations.cache_clear()


def test_normalize_rows_maps_aliases():
    df = normalize_rows(ROWS)
    assert list(df.columns) == ["latitude", "longitude", "depth", "time", "o2", "status"]
    assert len(df) == 2
    assert df.loc[0, "o2"] == 2.1
    assert df.loc[1, "latitude"] == 15.0
    assert df.loc[1, "depth"] == 0


def test_load_from_file(tmp_path):
    path = tmp_path / "obs.json"
    path.write_text(json.dumps({"rows": ROWS[:2]}))
    df = load_observations(str(path))
    assert len(df) == 2
    assert df["o2"].tolist() == [2.1, 5.8]


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ObservationFeedError, match="not found"):
        load_observations(str(tmp_path / "missing.json"))


def test_load_from_url_with_mock_transport():
    calls = []

    def handler(request):
        calls.append(str(request.url))
        return httpx.Response(200, json=ROWS[:2])

    transport = httpx.MockTransport(handler)
    df = load_observations("https://obs.example.org/do.json", transport=transport)
    again = load_observations("https://obs.example.org/do.json", transport=transport)

    assert len(df) == 2
    assert again is df
    assert calls == ["https://obs.example.org/do.json"]


def test_http_error_becomes_feed_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    with pytest.raises(ObservationFeedError, match="Failed to fetch"):
        load_observations("https://obs.example.org/down.json", transport=transport)


def test_overlay_uses_nearest_observation():
    obs = normalize_rows(ROWS)
    fallback = SyntheticOceanProvider()
    provider = ObservationOceanProvider(obs, fallback=fallback, max_distance_deg=0.5)

    near = provider.sample_at(Coordinate(9.6, 75.4), WHEN)
    base = fallback.sample_at(Coordinate(9.6, 75.4), WHEN)
    assert near.dissolved_oxygen == 2.1
    assert near.depth == 35.0
    assert near.sea_surface_temp == base.sea_surface_temp

    # observation without a usable depth keeps the fallback depth
    goa = provider.sample_at(Coordinate(15.0, 73.0), WHEN)
    assert goa.dissolved_oxygen == 5.8
    assert goa.depth == fallback.sample_at(Coordinate(15.0, 73.0), WHEN).depth

    far = provider.sample_at(Coordinate(20.0, 85.0), WHEN)
    assert far == fallback.sample_at(Coordinate(20.0, 85.0), WHEN)

    dq = provider.data_quality()
    assert dq["observed_samples"] == 2
    assert dq["total_samples"] == 3
    assert dq["confidence"] == "MEDIUM"
    assert dq["errors"] == {}


def test_overlay_converts_mmol():
    obs = pd.DataFrame([{"latitude": 9.5, "longitude": 75.5, "depth": None, "time": None, "o2": 200.0, "status": None}])
    provider = ObservationOceanProvider(obs, o2_units="mmol/m3")
    assert provider.sample_at(Coordinate(9.5, 75.5), WHEN).dissolved_oxygen == pytest.approx(6.4)


def test_unreadable_source_falls_back_with_warning(tmp_path):
    with pytest.warns(UserWarning, match="synthetic"):
        provider = ObservationOceanProvider(str(tmp_path / "nope.json"))

    sample = provider.sample_at(Coordinate(9.5, 75.5), WHEN)
    assert sample == SyntheticOceanProvider().sample_at(Coordinate(9.5, 75.5), WHEN)
    dq = provider.data_quality()
    assert dq["confidence"] == "LOW"
    assert "observations" in dq["errors"]
