"""
Observation Feed — in-situ / reanalysis oxygen observations.

Loads a JSON array of observation rows (local file or http(s) URL), whose
key names vary by producer, into a normalised DataFrame:

    latitude, longitude, depth, time, o2, status

ObservationOceanProvider layers the nearest observation on top of a fallback
provider's sample, so the HSI pipeline can run on partial real data.
"""

import json
import os
import time
import warnings
from datetime import datetime
from functools import wraps
from typing import Callable

import httpx
import numpy as np
import pandas as pd

from data_fetch.ocean_provider import OceanSampleProvider, SyntheticOceanProvider
from models.domain import Coordinate, EnvironmentalSample

# Accepted spellings per canonical column
KEY_ALIASES = {
    "latitude": ("latitude", "lat", "Latitude", "LATITUDE"),
    "longitude": ("longitude", "lon", "Lon", "LONGITUDE"),
    "depth": ("depth", "Depth"),
    "time": ("time", "timestamp", "date", "datetime"),
    "o2": ("o2", "do_min", "do"),
    "status": ("status",),
}

# mmol/m³ → mg/L for O₂ (molar mass 32 g/mol)
MMOL_M3_TO_MG_L = 0.032


class ObservationFeedError(Exception):
    pass


def ttl_cache(ttl_seconds: int):
    def decorator(func: Callable):
        cache = {}

        @wraps(func)
        def wrapper(*args, **kwargs):
            key = (args, tuple(sorted(kwargs.items())))
            now = time.time()
            if key in cache:
                result, timestamp = cache[key]
                if now - timestamp < ttl_seconds:
                    return result
            result = func(*args, **kwargs)
            cache[key] = (result, now)
            return result

        wrapper.cache_clear = cache.clear
        return wrapper
    return decorator


def _first_present(row: dict, keys: tuple):
    for k in keys:
        if row.get(k) is not None:
            return row[k]
    return None


def normalize_rows(rows: list) -> pd.DataFrame:
    """Map producer-specific keys to canonical columns; drop rows without coordinates."""
    records = []
    for r in rows or []:
        if not isinstance(r, dict):
            continue
        records.append({col: _first_present(r, keys) for col, keys in KEY_ALIASES.items()})

    df = pd.DataFrame.from_records(records, columns=list(KEY_ALIASES.keys()))
    for col in ("latitude", "longitude", "depth", "o2"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df = df.dropna(subset=["latitude", "longitude"]).reset_index(drop=True)
    return df


def _fetch_remote(url: str, timeout: float, transport=None) -> list:
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPError as e:
        raise ObservationFeedError(f"Failed to fetch observations from {url}: {e}")
    except ValueError as e:
        raise ObservationFeedError(f"Invalid JSON from {url}: {e}")
    return data


@ttl_cache(ttl_seconds=3600)
def load_observations(source: str, timeout: float = 15.0, transport=None) -> pd.DataFrame:
    """
    Args:
        source: path to a JSON file, or an http(s) URL returning JSON
        timeout: HTTP timeout in seconds
        transport: optional httpx transport (e.g. MockTransport)

    Returns:
        DataFrame with columns latitude, longitude, depth, time, o2, status.
        Payloads wrapped as {"rows": [...]} are unwrapped.
    """
    if source.startswith(("http://", "https://")):
        data = _fetch_remote(source, timeout, transport)
    else:
        if not os.path.isfile(source):
            raise ObservationFeedError(f"Observation file not found: {source}")
        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ObservationFeedError(f"Could not read observations from {source}: {e}")

    if isinstance(data, dict):
        data = data.get("rows", [])
    if not isinstance(data, list):
        raise ObservationFeedError("Observation payload must be a list of rows")
    return normalize_rows(data)


class ObservationOceanProvider(OceanSampleProvider):
    """
    Nearest-observation overlay on a fallback provider.

    Within ``max_distance_deg`` of an observation, dissolved oxygen (and depth
    where reported) come from the observation; everything else from the
    fallback. Misses are counted, and a data-quality summary is available.
    """

    name = "observations"

    def __init__(
        self,
        observations: pd.DataFrame | str,
        fallback: OceanSampleProvider | None = None,
        max_distance_deg: float = 0.5,
        o2_units: str = "mg/L",
    ):
        self.fallback = fallback or SyntheticOceanProvider()
        self.max_distance_deg = max_distance_deg
        self.errors: dict[str, str] = {}
        self.hits = 0
        self.misses = 0

        if isinstance(observations, str):
            try:
                observations = load_observations(observations)
            except ObservationFeedError as e:
                self.errors["observations"] = str(e)
                warnings.warn(f"{e}; using {self.fallback.name} samples only")
                observations = normalize_rows([])

        obs = observations.dropna(subset=["o2"]) if "o2" in observations else observations
        if o2_units.lower().replace(" ", "") in ("mmol/m3", "mmol/m³"):
            obs = obs.assign(o2=obs["o2"] * MMOL_M3_TO_MG_L)
        self.observations = obs.reset_index(drop=True)
        self._coords = self.observations[["latitude", "longitude"]].to_numpy(dtype=float)

    def nearest(self, lat: float, lon: float) -> pd.Series | None:
        if len(self._coords) == 0:
            return None
        d = np.hypot(self._coords[:, 0] - lat, self._coords[:, 1] - lon)
        idx = int(np.argmin(d))
        if d[idx] > self.max_distance_deg:
            return None
        return self.observations.iloc[idx]

    def sample_at(self, coordinate: Coordinate, timestamp: datetime | None = None) -> EnvironmentalSample:
        base = self.fallback.sample_at(coordinate, timestamp)
        row = self.nearest(coordinate.lat, coordinate.lon)
        if row is None:
            self.misses += 1
            return base

        self.hits += 1
        depth = base.depth
        if pd.notna(row["depth"]) and row["depth"] > 0:
            depth = float(row["depth"])

        return EnvironmentalSample(
            coordinate=base.coordinate,
            sea_surface_temp=base.sea_surface_temp,
            chlorophyll=base.chlorophyll,
            depth=depth,
            dissolved_oxygen=float(row["o2"]),
            salinity=base.salinity,
            current_u=base.current_u,
            current_v=base.current_v,
            timestamp=base.timestamp,
        )

    def data_quality(self) -> dict:
        """Share of samples backed by an observation, graded HIGH/MEDIUM/LOW."""
        total = self.hits + self.misses
        coverage = self.hits / total if total else 0.0
        if coverage >= 0.8:
            confidence = "HIGH"
        elif coverage >= 0.5:
            confidence = "MEDIUM"
        else:
            confidence = "LOW"
        return {
            "confidence": confidence,
            "observed_samples": self.hits,
            "total_samples": total,
            "coverage": round(coverage, 3),
            "errors": dict(self.errors),
        }
