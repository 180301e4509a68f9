"""
Coastal Health — location analysis, map grid and hypoxia zones for the
Coastal Health Engine.

Same shape as the PFZ pipeline: simulated inputs → indices per cell →
grid snapshot → clustered zones.
"""

from datetime import datetime

import numpy as np

from config.constants import CHE_RISK_THRESHOLDS, CLUSTER_RADIUS_FACTOR, STANDARD_DEPTHS
from data_fetch.che_simulator import (
    generate_do_profile,
    generate_physical_context,
    generate_surface_bgc,
)
from models.che_model import (
    calculate_dzri,
    calculate_hypoxia_indicators,
    calculate_ors,
    calculate_pei,
    classify_risk,
    estimate_recovery_time,
    normalize_bgc,
)
from models.domain import Bounds, Coordinate

from analysis.hsi_grid import axis_values
from analysis.zone_extractor import cluster_cells, flat_earth_area_km2


def generate_location_analysis(lat: float, lon: float, time: datetime | None = None) -> dict:
    """
    Full CHE analysis for one point.

    Returns dict with: id, location, time, do_profile, surface_bgc, physical,
    hypoxia, indices {DZRI, PEI, ORS, risk_level}, pei_components, T_rec
    """
    time = time or datetime.now()

    physical = generate_physical_context(lat, lon, time)
    do_profile = generate_do_profile(lat, lon, time, physical)
    surface_bgc = generate_surface_bgc(lat, lon, time, physical)

    hypoxia = calculate_hypoxia_indicators(do_profile)
    pei_components = normalize_bgc(surface_bgc)

    dzri = calculate_dzri(hypoxia, physical["S_strat"])
    pei = calculate_pei(pei_components)
    t_rec = estimate_recovery_time(dzri, physical)
    ors = calculate_ors(t_rec)

    return {
        "id": f"loc_{lat:.4f}_{lon:.4f}_{int(time.timestamp() * 1000)}",
        "location": Coordinate(lat, lon),
        "time": time,
        "do_profile": do_profile,
        "surface_bgc": surface_bgc,
        "physical": physical,
        "hypoxia": hypoxia,
        "indices": {
            "DZRI": dzri,
            "PEI": pei,
            "ORS": ors,
            "risk_level": classify_risk(dzri),
        },
        "pei_components": pei_components,
        "T_rec": t_rec,
    }


def generate_simulation_grid(
    bounds,
    resolution: float = 0.5,
    selected_depth: int = 0,
    time: datetime | None = None,
) -> dict:
    """
    CHE indices over a lat/lon box.

    Args:
        selected_depth: one of STANDARD_DEPTHS; anything else reads the surface

    Returns:
        dict with cells (list of dicts: lat, lon, DZRI, PEI, ORS, risk_level,
        DO_at_depth), bounds, resolution, timestamp, selected_depth
    """
    if isinstance(bounds, dict):
        bounds = Bounds.from_dict(bounds)
    time = time or datetime.now()
    depth_idx = STANDARD_DEPTHS.index(selected_depth) if selected_depth in STANDARD_DEPTHS else 0

    cells = []
    for lat in axis_values(bounds.min_lat, bounds.max_lat, resolution):
        for lon in axis_values(bounds.min_lon, bounds.max_lon, resolution):
            a = generate_location_analysis(float(lat), float(lon), time)
            cells.append({
                "lat": float(lat),
                "lon": float(lon),
                "DZRI": a["indices"]["DZRI"],
                "PEI": a["indices"]["PEI"],
                "ORS": a["indices"]["ORS"],
                "risk_level": a["indices"]["risk_level"],
                "DO_at_depth": a["do_profile"]["do_values"][depth_idx],
            })

    return {
        "cells": cells,
        "bounds": bounds,
        "resolution": resolution,
        "timestamp": time,
        "selected_depth": selected_depth,
    }


class _CellRef:
    __slots__ = ("lat", "lon", "cell")

    def __init__(self, cell: dict):
        self.lat = cell["lat"]
        self.lon = cell["lon"]
        self.cell = cell


def extract_hypoxia_zones(
    grid: dict,
    threshold: float = CHE_RISK_THRESHOLDS["warning"],
    index: str = "DZRI",
) -> list[dict]:
    """
    Cluster cells with ``index`` ≥ threshold into bounding-box zones, using
    the same adjacency rule as the fishing-zone extractor.

    Returns list of dicts: boundary, centroid, area_km2, mean/max index,
    risk_level, cell_count. Largest zones first.
    """
    hot = [_CellRef(c) for c in grid["cells"] if c[index] >= threshold]
    if not hot:
        return []

    resolution = grid["resolution"]
    pad = resolution / 2
    zones = []
    for cluster in cluster_cells(hot, resolution * CLUSTER_RADIUS_FACTOR):
        lats = [c.lat for c in cluster]
        lons = [c.lon for c in cluster]
        values = [c.cell[index] for c in cluster]
        min_lat, max_lat, min_lon, max_lon = min(lats), max(lats), min(lons), max(lons)
        mean_value = float(np.mean(values))
        zones.append({
            "boundary": (
                (min_lon - pad, min_lat - pad),
                (max_lon + pad, min_lat - pad),
                (max_lon + pad, max_lat + pad),
                (min_lon - pad, max_lat + pad),
                (min_lon - pad, min_lat - pad),
            ),
            "centroid": Coordinate((min_lat + max_lat) / 2, (min_lon + max_lon) / 2),
            # padded extent: a lone flagged cell still covers one cell
            "area_km2": flat_earth_area_km2(min_lat - pad, max_lat + pad, min_lon - pad, max_lon + pad),
            f"mean_{index}": mean_value,
            f"max_{index}": float(max(values)),
            "risk_level": classify_risk(mean_value),
            "cell_count": len(cluster),
        })

    return sorted(zones, key=lambda z: z["area_km2"], reverse=True)
