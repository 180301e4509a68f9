"""
Ocean Sample Providers — environmental samples for a coordinate.

    OceanSampleProvider        single-method interface: sample_at(coord, time)
    SyntheticOceanProvider     deterministic stand-in for a satellite feed

The scoring / clustering pipeline only ever calls sample_at(), so a real
feed (see observation_feed.py) swaps in without touching it.
"""

import math
from datetime import datetime

from config.ports import SYNTHETIC_HOTSPOTS
from models.domain import Coordinate, EnvironmentalSample


class OceanSampleProvider:
    """Interface for anything that can produce an EnvironmentalSample."""

    name = "abstract"

    def sample_at(self, coordinate: Coordinate, timestamp: datetime | None = None) -> EnvironmentalSample:
        raise NotImplementedError


def seeded_random(seed: float) -> float:
    """Deterministic pseudo-random value in [0, 1) from a numeric seed."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def gaussian_blob(lat: float, lon: float, hotspot: dict) -> float:
    """Gaussian fall-off of a hotspot at (lat, lon), scaled by its intensity."""
    dx = lon - hotspot["lon"]
    dy = lat - hotspot["lat"]
    sigma = hotspot["radius"] / 2
    return math.exp(-(dx * dx + dy * dy) / (2 * sigma * sigma)) * hotspot["intensity"]


def hotspot_strength(lat: float, lon: float, hotspots: list | None = None) -> tuple[float, dict | None]:
    """Strongest hotspot influence at a point → (strength 0-1, hotspot)."""
    best, best_spot = 0.0, None
    for spot in (hotspots if hotspots is not None else SYNTHETIC_HOTSPOTS):
        s = gaussian_blob(lat, lon, spot)
        if s > best:
            best, best_spot = s, spot
    return best, best_spot


def _clip(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class SyntheticOceanProvider(OceanSampleProvider):
    """
    Layered synthetic ocean for the Arabian Sea / Bay of Bengal box:
        1. latitude and coast-distance gradients
        2. seeded noise (same coordinate → same sample)
        3. hotspot blobs pulling conditions toward each hotspot's water mass
    """

    name = "synthetic"

    def __init__(self, seed: int = 42, hotspots: list | None = None):
        self.seed = seed
        self.hotspots = list(hotspots) if hotspots is not None else list(SYNTHETIC_HOTSPOTS)

    def _cell_seed(self, lat: float, lon: float) -> int:
        return self.seed + math.floor(lat * 1000 + lon * 100)

    def sample_at(self, coordinate: Coordinate, timestamp: datetime | None = None) -> EnvironmentalSample:
        lat, lon = coordinate.lat, coordinate.lon
        seed = self._cell_seed(lat, lon)
        noise = seeded_random(seed)

        lat_factor = (lat - 8) / 20  # 0 → 1 south to north
        dist_to_coast = max(0.0, min(lon - 68, 88 - lon, lat - 6, 24 - lat))

        base = {
            "sst": 29 - lat_factor * 4 + noise * 2,
            "chlorophyll": 1.5 / (1 + dist_to_coast * 0.3) + noise * 0.3,
            "depth": 30 + dist_to_coast * 25 + noise * 15,
            "dissolved_oxygen": 4.5 + noise * 0.5,
        }

        strength, spot = hotspot_strength(lat, lon, self.hotspots)
        values = dict(base)
        if spot is not None:
            for key, target in spot.get("target", {}).items():
                values[key] = base[key] + (target - base[key]) * strength

        return EnvironmentalSample(
            coordinate=coordinate,
            sea_surface_temp=_clip(values["sst"], 20, 32),
            chlorophyll=_clip(values["chlorophyll"], 0.05, 12),
            depth=_clip(values["depth"], 10, 1000),
            dissolved_oxygen=_clip(values["dissolved_oxygen"], 3, 9),
            salinity=34 + noise * 2,
            current_u=(noise - 0.5) * 0.5,
            current_v=(seeded_random(seed + 1) - 0.5) * 0.5,
            timestamp=timestamp or datetime.now(),
        )
