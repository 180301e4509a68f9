"""
Domain value objects shared by the PFZ and CHE pipelines.

All types are frozen: a result, once produced, is never edited in place.
Recomputes build new objects and callers swap the whole snapshot.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @classmethod
    def from_dict(cls, d: dict) -> "Bounds":
        return cls(d["min_lat"], d["max_lat"], d["min_lon"], d["max_lon"])

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon


@dataclass(frozen=True)
class EnvironmentalSample:
    """One environmental observation at a coordinate."""

    coordinate: Coordinate
    sea_surface_temp: float   # °C
    chlorophyll: float        # mg/m³
    depth: float              # m, positive downward
    dissolved_oxygen: float   # mg/L
    salinity: float           # PSU
    current_u: float          # m/s, east-west
    current_v: float          # m/s, north-south
    timestamp: datetime

    @property
    def lat(self) -> float:
        return self.coordinate.lat

    @property
    def lon(self) -> float:
        return self.coordinate.lon


@dataclass(frozen=True)
class Preference:
    min: float
    max: float
    optimal: float


@dataclass(frozen=True)
class SpeciesProfile:
    id: str
    name: str
    scientific_name: str
    icon: str
    color: str
    preferences: dict
    weights: dict
    peak_seasons: tuple = ()
    economic_value: str = "medium"
    target_fishery: tuple = ()
    migration_patterns: Optional[str] = None

    @classmethod
    def from_dict(cls, species_id: str, d: dict) -> "SpeciesProfile":
        prefs = {
            factor: Preference(p["min"], p["max"], p["optimal"])
            for factor, p in d.get("preferences", {}).items()
        }
        return cls(
            id=species_id,
            name=d["name"],
            scientific_name=d.get("scientific_name", ""),
            icon=d.get("icon", ""),
            color=d.get("color", "#3B82F6"),
            preferences=prefs,
            weights=dict(d.get("weights", {})),
            peak_seasons=tuple(d.get("peak_seasons", [])),
            economic_value=d.get("economic_value", "medium"),
            target_fishery=tuple(d.get("target_fishery", [])),
            migration_patterns=d.get("migration_patterns"),
        )


@dataclass(frozen=True)
class FactorScore:
    factor: str
    raw_value: float
    suitability: float
    weight: float
    contribution: float


@dataclass(frozen=True)
class HSIResult:
    coordinate: Coordinate
    species: str
    total_hsi: float
    factors: tuple
    confidence: float
    timestamp: datetime

    @property
    def lat(self) -> float:
        return self.coordinate.lat

    @property
    def lon(self) -> float:
        return self.coordinate.lon

    def factor(self, name: str) -> Optional[FactorScore]:
        for f in self.factors:
            if f.factor == name:
                return f
        return None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class HSIGrid:
    species: str
    bounds: Bounds
    resolution: float
    cells: tuple
    generated_at: datetime


@dataclass(frozen=True)
class PFZPolygon:
    id: str
    species: tuple
    dominant_species: str
    boundary: tuple           # closed ring of (lon, lat), GeoJSON order
    centroid: Coordinate
    area_km2: float
    mean_hsi: float
    max_hsi: float
    potential: str            # high | medium | low
    confidence: float
    distance_to_shore_km: float
    nearest_port: str
    cell_count: int
    timestamp: datetime
    mean_depth: Optional[float] = None
    estimated_travel_time_hours: Optional[float] = None
    environmental: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PFZForecast:
    date: datetime
    species: str
    polygons: tuple
    grid_summary: dict
    advisory: str
    confidence: float

    def to_dict(self) -> dict:
        return asdict(self)
