"""
HSI Grid — scores every cell of a lat/lon box for one species.

The grid is a snapshot: any change of species, time or bounds means a new
grid. Cells are produced in row-major order (latitude outer, longitude
inner) starting from the south-west corner, upper bounds inclusive.
"""

import math
from datetime import datetime

import numpy as np
import pandas as pd

from config.constants import DEFAULT_GRID_RESOLUTION, MAX_GRID_RESOLUTION
from config.species import get_species_profile
from data_fetch.ocean_provider import OceanSampleProvider, SyntheticOceanProvider
from models.domain import Bounds, Coordinate, HSIGrid
from models.hsi_model import FACTORS, compute_hsi


def axis_values(start: float, stop: float, step: float) -> np.ndarray:
    """start, start+step, … ≤ stop, without float drift."""
    if step <= 0:
        raise ValueError(f"Grid resolution must be positive, got {step}")
    n = int(math.floor((stop - start) / step + 1e-9)) + 1
    return np.round(start + np.arange(max(n, 0)) * step, 6)


def generate_hsi_grid(
    bounds,
    resolution: float = DEFAULT_GRID_RESOLUTION,
    species: str = "indian_mackerel",
    provider: OceanSampleProvider | None = None,
    timestamp: datetime | None = None,
) -> HSIGrid:
    """
    Args:
        bounds: Bounds or dict with min_lat / max_lat / min_lon / max_lon
        resolution: requested cell size in degrees (capped at MAX_GRID_RESOLUTION)
        species: species id
        provider: sample source; synthetic ocean when omitted
        timestamp: sample time shared by every cell

    Returns:
        HSIGrid with one HSIResult per cell.
    """
    if isinstance(bounds, dict):
        bounds = Bounds.from_dict(bounds)
    profile = get_species_profile(species)
    provider = provider or SyntheticOceanProvider()
    timestamp = timestamp or datetime.now()

    actual_resolution = min(resolution, MAX_GRID_RESOLUTION)

    cells = []
    for lat in axis_values(bounds.min_lat, bounds.max_lat, actual_resolution):
        for lon in axis_values(bounds.min_lon, bounds.max_lon, actual_resolution):
            sample = provider.sample_at(Coordinate(float(lat), float(lon)), timestamp)
            cells.append(compute_hsi(profile, sample))

    return HSIGrid(
        species=species,
        bounds=bounds,
        resolution=actual_resolution,
        cells=tuple(cells),
        generated_at=datetime.now(),
    )


def grid_to_frame(grid: HSIGrid) -> pd.DataFrame:
    """One row per cell: lat, lon, total_hsi, confidence, <factor>_value, <factor>_suitability."""
    rows = []
    for cell in grid.cells:
        row = {
            "lat": cell.lat,
            "lon": cell.lon,
            "total_hsi": cell.total_hsi,
            "confidence": cell.confidence,
        }
        for f in cell.factors:
            row[f"{f.factor}_value"] = f.raw_value
            row[f"{f.factor}_suitability"] = f.suitability
        rows.append(row)

    columns = ["lat", "lon", "total_hsi", "confidence"]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(rows)
    for name in FACTORS:
        columns += [c for c in (f"{name}_value", f"{name}_suitability") if c in df.columns]
    return df[columns]


def grid_to_matrix(grid: HSIGrid, value: str = "total_hsi"):
    """
    Pivot a grid column into a 2-D array for plotting.

    Returns:
        (matrix shape (Y, X), lat_axis, lon_axis); missing cells are NaN.
    """
    df = grid_to_frame(grid)
    if df.empty:
        return np.empty((0, 0)), np.array([]), np.array([])
    pivot = df.pivot_table(index="lat", columns="lon", values=value, aggfunc="mean")
    pivot = pivot.sort_index().sort_index(axis=1)
    return pivot.to_numpy(dtype=float), pivot.index.to_numpy(), pivot.columns.to_numpy()


def summarize_grid(grid: HSIGrid, high_threshold: float) -> dict:
    """Cell counts and high-potential coverage (percent)."""
    total = len(grid.cells)
    high = sum(1 for c in grid.cells if c.total_hsi >= high_threshold)
    return {
        "total_cells": total,
        "high_potential_cells": high,
        "coverage": (high / total) * 100 if total else 0.0,
    }
