"""Coastal Health Engine tests."""

import math
from datetime import datetime

import pytest

from analysis.coastal_health import (
    extract_hypoxia_zones,
    generate_location_analysis,
    generate_simulation_grid,
)
from config.constants import STANDARD_DEPTHS
from data_fetch.che_simulator import generate_do_profile, generate_physical_context, seeded_random
from models.che_model import (
    calculate_dzri,
    calculate_hypoxia_indicators,
    calculate_ors,
    calculate_pei,
    classify_risk,
    get_do_at_depth,
    normalize,
    normalize_bgc,
    sigmoid,
)

WHEN = datetime(2025, 8, 1, 12, 0)


def test_lcg_is_repeatable():
    a, b = seeded_random(1234), seeded_random(1234)
    seq = [a() for _ in range(5)]
    assert seq == [b() for _ in range(5)]
    assert all(0 <= v <= 1 for v in seq)
    assert len(set(seq)) == 5


def test_location_analysis_is_deterministic_and_bounded():
    first = generate_location_analysis(9.5, 75.5, WHEN)
    second = generate_location_analysis(9.5, 75.5, WHEN)
    assert first["indices"] == second["indices"]
    assert first["do_profile"] == second["do_profile"]

    idx = first["indices"]
    for key in ("DZRI", "PEI", "ORS"):
        assert 0 < idx[key] < 1
    assert idx["risk_level"] == classify_risk(idx["DZRI"])
    assert first["do_profile"]["depths"] == list(STANDARD_DEPTHS)
    assert all(v >= 0 for v in first["do_profile"]["do_values"])
    assert first["location"].lat == 9.5


def test_physical_context_ranges():
    phys = generate_physical_context(15.0, 72.0, WHEN)
    assert 0 <= phys["SST"] <= 35
    assert 5 <= phys["MLD"] <= 100
    assert 0 <= phys["S_strat"] <= 1
    assert 10 <= phys["bathymetry"] <= 500
    profile = generate_do_profile(15.0, 72.0, WHEN, phys)
    assert len(profile["do_values"]) == len(STANDARD_DEPTHS)


def test_hypoxia_indicators():
    profile = {"depths": [0, 10, 20, 30], "do_values": [6.0, 3.0, 1.5, 1.0]}
    h = calculate_hypoxia_indicators(profile, do_crit=2.0)
    assert h["H"] == [False, False, True, True]
    assert h["f_hyp"] == 0.5
    assert h["z_top"] == 20
    assert h["D_depth"] == pytest.approx(1 / 3)
    assert h["P"] == 1.0

    expected = sigmoid(2 * 0.5 + 1 / 3 + 1.0 + 0.4 - 2)
    assert calculate_dzri(h, 0.4) == pytest.approx(expected)


def test_oxygenated_profile_has_no_hypoxia():
    h = calculate_hypoxia_indicators({"depths": [0, 50, 100], "do_values": [7, 6, 5]})
    assert h["f_hyp"] == 0
    assert h["z_top"] is None
    assert h["D_depth"] == 0
    assert h["P"] == 0


def test_pei_and_normalisation():
    assert normalize(5, 5, 5) == 0
    assert normalize(60, 0, 50) == 1
    comps = normalize_bgc({"NO3": 25, "PO4": 1.5, "Turbidity": 10, "CDOM": 1.0, "Chl": 15, "DO": 6})
    assert set(comps) == {"NO3_norm", "PO4_norm", "Turbidity_norm", "CDOM_norm", "Chl_norm"}
    assert all(v == pytest.approx(0.5) for v in comps.values())
    assert calculate_pei(comps) == pytest.approx(sigmoid(0.5 * 4 - 0.5))


def test_ors():
    assert calculate_ors(0) == 1.0
    assert calculate_ors(10) == pytest.approx(math.exp(-1))


def test_do_at_depth_interpolates_and_clamps():
    profile = {"depths": [0, 10, 20], "do_values": [6.0, 3.0, 1.5]}
    assert get_do_at_depth(profile, 15) == pytest.approx(2.25)
    assert get_do_at_depth(profile, 10) == 3.0
    assert get_do_at_depth(profile, 200) == 1.5
    assert get_do_at_depth(profile, -5) == 6.0


def test_classify_risk():
    assert classify_risk(0.29) == "safe"
    assert classify_risk(0.3) == "warning"
    assert classify_risk(0.6) == "high"


def test_simulation_grid():
    bounds = {"min_lat": 10.0, "max_lat": 10.5, "min_lon": 75.0, "max_lon": 75.5}
    grid = generate_simulation_grid(bounds, resolution=0.5, selected_depth=50, time=WHEN)
    assert len(grid["cells"]) == 4
    assert grid["selected_depth"] == 50

    c = grid["cells"][0]
    analysis = generate_location_analysis(c["lat"], c["lon"], WHEN)
    assert c["DZRI"] == analysis["indices"]["DZRI"]
    assert c["DO_at_depth"] == analysis["do_profile"]["do_values"][STANDARD_DEPTHS.index(50)]


def test_hypoxia_zones_cluster_flagged_cells():
    def cells(lat0, lon0, n, value):
        return [
            {"lat": lat0 + i * 0.5, "lon": lon0 + j * 0.5, "DZRI": value}
            for i in range(n) for j in range(n)
        ]

    grid = {
        "resolution": 0.5,
        "cells": cells(10.0, 75.0, 2, 0.8) + cells(20.0, 85.0, 1, 0.7) + cells(15.0, 80.0, 2, 0.2),
    }
    zones = extract_hypoxia_zones(grid, threshold=0.6)

    assert len(zones) == 2
    big, small = zones
    assert big["cell_count"] == 4
    assert big["mean_DZRI"] == pytest.approx(0.8)
    assert big["risk_level"] == "high"
    assert big["area_km2"] > small["area_km2"] > 0
    assert big["boundary"][0] == big["boundary"][-1]
    assert extract_hypoxia_zones(grid, threshold=0.9) == []
