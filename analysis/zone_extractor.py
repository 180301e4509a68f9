"""
Zone Extractor — HSI grid → Potential Fishing Zone polygons.

    1. keep cells with HSI ≥ threshold
    2. connected components: cells within 2.5 × resolution are neighbours
    3. one padded bounding box per component, with zone statistics
    4. drop zones smaller than MIN_PFZ_AREA_KM2

Clustering is a plain depth-first expansion with O(n²) distance checks.
Above KDTREE_MIN_CELLS candidates the neighbour query goes through a
scipy cKDTree instead; adjacency (Euclidean ≤ radius) is identical.
"""

import math
import time
from datetime import datetime

import numpy as np
from scipy.spatial import cKDTree

from config.constants import (
    CLUSTER_RADIUS_FACTOR,
    COASTLINE_LON,
    KDTREE_MIN_CELLS,
    KM_PER_DEGREE,
    MIN_PFZ_AREA_KM2,
    PFZ_EXTRACTION_THRESHOLD,
    POLYGON_PADDING_FACTOR,
    POTENTIAL_TIERS,
    VESSEL_SPEED_KMH,
)
from config.ports import PORTS
from models.domain import Coordinate, HSIGrid, PFZPolygon


# ─── clustering ──────────────────────────────────────────────────────────────

def _coords(cells) -> np.ndarray:
    return np.array([[c.lat, c.lon] for c in cells], dtype=float).reshape(-1, 2)


def _neighbours_bruteforce(points: np.ndarray, max_distance: float):
    def query(i):
        d = np.hypot(points[:, 0] - points[i, 0], points[:, 1] - points[i, 1])
        return np.nonzero(d <= max_distance)[0]
    return query


def _neighbours_kdtree(points: np.ndarray, max_distance: float):
    tree = cKDTree(points)

    def query(i):
        return tree.query_ball_point(points[i], r=max_distance)
    return query


def cluster_cells(cells, max_distance: float, use_kdtree: bool | None = None) -> list[list]:
    """
    Group cells (anything with .lat / .lon) into connected components.

    Components come out in order of their first member in ``cells``; members
    are in depth-first visiting order.
    """
    cells = list(cells)
    if not cells:
        return []

    points = _coords(cells)
    if use_kdtree is None:
        use_kdtree = len(cells) > KDTREE_MIN_CELLS
    query = (_neighbours_kdtree if use_kdtree else _neighbours_bruteforce)(points, max_distance)

    visited = np.zeros(len(cells), dtype=bool)
    clusters = []
    for start in range(len(cells)):
        if visited[start]:
            continue
        cluster = []
        stack = [start]
        while stack:
            idx = stack.pop()
            if visited[idx]:
                continue
            visited[idx] = True
            cluster.append(cells[idx])
            # push in reverse so lower indices are expanded first
            for j in sorted(query(idx), reverse=True):
                if not visited[j]:
                    stack.append(int(j))
        clusters.append(cluster)
    return clusters


# ─── zone statistics ─────────────────────────────────────────────────────────

def classify_potential(mean_hsi: float) -> str:
    if mean_hsi >= POTENTIAL_TIERS["high"]["min_hsi"]:
        return "high"
    elif mean_hsi >= POTENTIAL_TIERS["medium"]["min_hsi"]:
        return "medium"
    return "low"


def flat_earth_area_km2(min_lat: float, max_lat: float, min_lon: float, max_lon: float) -> float:
    """Δlat·111 × Δlon·111 × cos(mid-lat). Only sensible for small regional boxes."""
    mid_lat = math.radians((min_lat + max_lat) / 2)
    return (max_lat - min_lat) * KM_PER_DEGREE * (max_lon - min_lon) * KM_PER_DEGREE * math.cos(mid_lat)


def estimate_distance_to_shore(lon: float) -> float:
    """Placeholder: longitude offset from a fixed west-coast meridian, in km."""
    return abs(lon - COASTLINE_LON) * KM_PER_DEGREE


def nearest_port(lat: float, lon: float) -> dict:
    """Closest gazetteer port by planar degree distance."""
    return min(PORTS, key=lambda p: math.hypot(lat - p["lat"], lon - p["lon"]))


def _mean_factor(cluster, factor: str):
    values = [f.raw_value for c in cluster for f in c.factors if f.factor == factor]
    return float(np.mean(values)) if values else None


def build_zone(cluster: list, grid: HSIGrid, idx: int, stamp_ms: int, timestamp: datetime) -> PFZPolygon:
    lats = [c.lat for c in cluster]
    lons = [c.lon for c in cluster]
    min_lat, max_lat = min(lats), max(lats)
    min_lon, max_lon = min(lons), max(lons)

    pad = grid.resolution * POLYGON_PADDING_FACTOR
    ring = (
        (min_lon - pad, min_lat - pad),
        (max_lon + pad, min_lat - pad),
        (max_lon + pad, max_lat + pad),
        (min_lon - pad, max_lat + pad),
        (min_lon - pad, min_lat - pad),
    )

    hsi = [c.total_hsi for c in cluster]
    mean_hsi = float(np.mean(hsi))
    centroid = Coordinate((min_lat + max_lat) / 2, (min_lon + max_lon) / 2)
    distance_to_shore = estimate_distance_to_shore(min_lon)

    return PFZPolygon(
        id=f"PFZ-{grid.species}-{stamp_ms}-{idx}",
        species=(grid.species,),
        dominant_species=grid.species,
        boundary=ring,
        centroid=centroid,
        area_km2=flat_earth_area_km2(min_lat, max_lat, min_lon, max_lon),
        mean_hsi=mean_hsi,
        max_hsi=float(max(hsi)),
        potential=classify_potential(mean_hsi),
        confidence=float(np.mean([c.confidence for c in cluster])),
        distance_to_shore_km=distance_to_shore,
        nearest_port=nearest_port(centroid.lat, centroid.lon)["name"],
        cell_count=len(cluster),
        timestamp=timestamp,
        mean_depth=_mean_factor(cluster, "depth"),
        estimated_travel_time_hours=round(distance_to_shore / VESSEL_SPEED_KMH, 1),
        environmental={
            "mean_sst": _mean_factor(cluster, "sst"),
            "mean_chlorophyll": _mean_factor(cluster, "chlorophyll"),
            "mean_do": _mean_factor(cluster, "dissolved_oxygen"),
        },
    )


def extract_zones(
    grid: HSIGrid,
    threshold: float = PFZ_EXTRACTION_THRESHOLD,
    min_area_km2: float = MIN_PFZ_AREA_KM2,
) -> list[PFZPolygon]:
    """
    Args:
        grid: HSIGrid snapshot
        threshold: minimum HSI for a cell to join a zone
        min_area_km2: zones below this area are discarded as noise

    Returns:
        list of PFZPolygon, in cluster order.
    """
    candidates = [c for c in grid.cells if c.total_hsi >= threshold]
    if not candidates:
        return []

    clusters = cluster_cells(candidates, grid.resolution * CLUSTER_RADIUS_FACTOR)

    stamp_ms = int(time.time() * 1000)
    now = datetime.now()
    zones = [build_zone(cluster, grid, idx, stamp_ms, now) for idx, cluster in enumerate(clusters)]
    return [z for z in zones if z.area_km2 >= min_area_km2]
