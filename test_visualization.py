"""Rendering / export smoke tests."""

import json
from datetime import datetime

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import plotly.graph_objects as go

from analysis.coastal_health import extract_hypoxia_zones
from analysis.hsi_grid import generate_hsi_grid
from analysis.pfz_forecast import analyze_location
from analysis.species_comparison import compare_species
from analysis.zone_extractor import extract_zones
from models.domain import PFZForecast
from visualization.factor_breakdown import build_factor_bar, build_species_comparison_bar
from visualization.hsi_heatmap import build_factor_heatmaps, build_hsi_heatmap
from visualization.zone_geojson import hypoxia_zones_to_geojson, write_geojson, zones_to_geojson

WHEN = datetime(2025, 10, 15, 6, 0)
KERALA_BOX = {"min_lat": 8.0, "max_lat": 11.0, "min_lon": 74.0, "max_lon": 77.0}


def _kerala():
    grid = generate_hsi_grid(KERALA_BOX, 0.3, "indian_mackerel", timestamp=WHEN)
    return grid, extract_zones(grid)


def test_hsi_heatmaps_render():
    grid, zones = _kerala()
    fig = build_hsi_heatmap(grid, zones)
    assert isinstance(fig, matplotlib.figure.Figure)
    assert len(fig.axes[0].patches) == len(zones)

    panels = build_factor_heatmaps(grid)
    assert len(panels.axes) >= 4
    plt.close('all')


def test_zones_to_geojson():
    _, zones = _kerala()
    fc = zones_to_geojson(zones)
    assert fc["type"] == "FeatureCollection"
    assert len(fc["features"]) == len(zones) > 0

    feature = fc["features"][0]
    ring = feature["geometry"]["coordinates"][0]
    assert feature["geometry"]["type"] == "Polygon"
    assert tuple(ring[0]) == tuple(ring[-1])
    assert feature["properties"]["nearest_port"] == zones[0].nearest_port
    json.dumps(fc)


def test_write_geojson(tmp_path):
    zones = extract_hypoxia_zones({
        "resolution": 0.5,
        "cells": [{"lat": 10.0, "lon": 75.0, "DZRI": 0.9}, {"lat": 10.5, "lon": 75.0, "DZRI": 0.8}],
    })
    fc = hypoxia_zones_to_geojson(zones)
    path = tmp_path / "zones.geojson"
    write_geojson(fc, str(path))
    loaded = json.loads(path.read_text())
    assert loaded["features"][0]["properties"]["cell_count"] == 2
    assert loaded["features"][0]["properties"]["centroid"] == [75.0, 10.25]


def test_factor_bar():
    point = analyze_location(9.5, 75.5, "indian_mackerel", timestamp=WHEN)
    fig = build_factor_bar(point["result"], dark=True)
    assert isinstance(fig, go.Figure)
    assert len(fig.data[0].y) == 4
    assert "Sea Surface Temp" in fig.data[0].y


def test_species_comparison_bar():
    forecasts = {
        sid: PFZForecast(WHEN, sid, (), {"total_cells": 1, "high_potential_cells": 0, "coverage": 0.0}, "", 0.5)
        for sid in ("indian_mackerel", "oil_sardine")
    }
    comparison = compare_species(list(forecasts), WHEN, forecasts=forecasts)
    fig = build_species_comparison_bar(comparison)
    assert len(fig.data) == 2
    assert list(fig.data[0].x) == ["Indian Mackerel", "Oil Sardine"]
