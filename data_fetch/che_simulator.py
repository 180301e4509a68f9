"""
CHE Simulator — synthetic physical context, DO profiles and surface
biogeochemistry for the Coastal Health Engine.

Deterministic per (lat, lon, hour): the same inputs always give the same
profile, so maps are stable while a user pans around. Stands in for a
reanalysis / Argo feed.
"""

import math
from datetime import datetime

import numpy as np

from config.constants import STANDARD_DEPTHS

LCG_MODULUS = 0x7FFFFFFF


def seeded_random(seed: int):
    """Linear congruential generator → callable yielding floats in [0, 1]."""
    state = int(seed) & LCG_MODULUS

    def rand() -> float:
        nonlocal state
        state = (state * 1103515245 + 12345) & LCG_MODULUS
        return state / LCG_MODULUS
    return rand


def generate_seed(lat: float, lon: float, time: datetime) -> int:
    """Seed from location and time at hourly granularity."""
    hours = time.timestamp() / 3600
    return math.floor((lat * 1000 + lon * 100 + hours) * 1000) % 2147483647


def _month_index(time: datetime) -> int:
    return time.month - 1  # 0 = January


def generate_physical_context(lat: float, lon: float, time: datetime) -> dict:
    rand = seeded_random(generate_seed(lat - 0.01, lon - 0.01, time))

    latitude_factor = abs(lat) / 90
    seasonal_sst = math.sin((_month_index(time) - 1) * math.pi / 6) * 5
    sst = 28 - latitude_factor * 20 + seasonal_sst + (rand() - 0.5) * 2

    distance_to_coast = 10 + rand() * 100          # km, until real coastline data
    bathymetry = 50 + distance_to_coast * 2 + rand() * 100
    mld = 10 + (sst / 30) * 30 + rand() * 10
    s_strat = (sst / 30) * 0.8 + seasonal_sst / 10 * 0.2 + rand() * 0.2

    return {
        "SST": float(np.clip(sst, 0, 35)),
        "MLD": float(np.clip(mld, 5, 100)),
        "S_strat": float(np.clip(s_strat, 0, 1)),
        "bathymetry": float(np.clip(bathymetry, 10, 500)),
        "distance_to_coast": float(np.clip(distance_to_coast, 0, 500)),
    }


def generate_do_profile(lat: float, lon: float, time: datetime, physical: dict) -> dict:
    """
    DO at each standard depth. Falls off with depth, with an extra dip below
    the mixed layer and near the coast in the stratified season.
    """
    rand = seeded_random(generate_seed(lat, lon, time))

    surface_do = 8.5 - (physical["SST"] - 20) * 0.15 + (rand() - 0.5) * 0.5
    coastal_factor = math.exp(-physical["distance_to_coast"] / 50)
    seasonal_factor = math.sin((_month_index(time) - 3) * math.pi / 6) * 0.3
    hypoxia_risk = coastal_factor * (0.5 + seasonal_factor) * 3

    do_values = []
    for depth in STANDARD_DEPTHS:
        depth_factor = math.exp(-depth / 30) + 0.3 * math.exp(-(((depth - 60) / 40) ** 2))
        strat_effect = physical["S_strat"] * 0.5 if depth > physical["MLD"] else 0.0
        do = surface_do * depth_factor - strat_effect - hypoxia_risk * (depth / 100)
        do += (rand() - 0.5) * 0.3
        do_values.append(max(0.0, do))

    return {"depths": list(STANDARD_DEPTHS), "do_values": do_values}


def generate_surface_bgc(lat: float, lon: float, time: datetime, physical: dict) -> dict:
    """Correlated nutrient / turbidity / chlorophyll levels; richer near the coast."""
    rand = seeded_random(generate_seed(lat + 0.01, lon + 0.01, time))

    coastal_factor = math.exp(-physical["distance_to_coast"] / 30)
    eutrophication = coastal_factor * (0.3 + rand() * 0.7)

    return {
        "DO": 6 + rand() * 2 - eutrophication * 2,
        "NO3": 5 + eutrophication * 40 + rand() * 5,
        "PO4": 0.3 + eutrophication * 2.5 + rand() * 0.3,
        "Chl": 2 + eutrophication * 25 + rand() * 3,
        "Turbidity": 1 + eutrophication * 15 + rand() * 2,
        "CDOM": 0.2 + eutrophication * 1.5 + rand() * 0.2,
    }
