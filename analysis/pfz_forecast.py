"""
PFZ Forecast — full species forecast and single-point analysis.

    coordinate → sample → factor scores → HSI → grid → zones → advisory

Stateless: every call recomputes from scratch and returns a new snapshot.
"""

from datetime import datetime

from config.constants import (
    DEFAULT_GRID_RESOLUTION,
    DEFAULT_PFZ_BOUNDS,
    HSI_THRESHOLDS,
    LOCATION_RECOMMENDATIONS,
    PFZ_EXTRACTION_THRESHOLD,
)
from config.species import get_species_profile
from data_fetch.ocean_provider import OceanSampleProvider, SyntheticOceanProvider
from models.domain import Coordinate, PFZForecast
from models.hsi_model import compute_hsi, limiting_factor

from analysis.advisory import build_advisory
from analysis.hsi_grid import generate_hsi_grid, summarize_grid
from analysis.zone_extractor import extract_zones

DEFAULT_FORECAST_CONFIDENCE = 0.5


def generate_forecast(
    species: str,
    date: datetime | None = None,
    provider: OceanSampleProvider | None = None,
    bounds=None,
    resolution: float = DEFAULT_GRID_RESOLUTION,
    threshold: float = PFZ_EXTRACTION_THRESHOLD,
) -> PFZForecast:
    """
    Returns:
        PFZForecast with polygons, grid_summary {total_cells,
        high_potential_cells, coverage %}, advisory text and confidence
        (mean zone confidence, 0.5 when no zone survives).
    """
    profile = get_species_profile(species)
    date = date or datetime.now()

    grid = generate_hsi_grid(
        bounds or DEFAULT_PFZ_BOUNDS,
        resolution,
        species,
        provider=provider,
        timestamp=date,
    )
    polygons = extract_zones(grid, threshold)

    if polygons:
        confidence = sum(p.confidence for p in polygons) / len(polygons)
    else:
        confidence = DEFAULT_FORECAST_CONFIDENCE

    return PFZForecast(
        date=date,
        species=species,
        polygons=tuple(polygons),
        grid_summary=summarize_grid(grid, HSI_THRESHOLDS["high"]),
        advisory=build_advisory(profile, polygons),
        confidence=confidence,
    )


def recommend(total_hsi: float) -> str:
    for min_hsi, text in LOCATION_RECOMMENDATIONS:
        if total_hsi >= min_hsi:
            return text
    return LOCATION_RECOMMENDATIONS[-1][1]


def analyze_location(
    lat: float,
    lon: float,
    species: str,
    provider: OceanSampleProvider | None = None,
    timestamp: datetime | None = None,
) -> dict:
    """
    HSI at one point plus a plain-language recommendation.

    Returns dict with: result (HSIResult), total_hsi, confidence,
    recommendation, limiting_factor, factors {name: suitability}.
    """
    provider = provider or SyntheticOceanProvider()
    sample = provider.sample_at(Coordinate(lat, lon), timestamp or datetime.now())
    result = compute_hsi(species, sample)

    return {
        "result": result,
        "total_hsi": round(result.total_hsi, 3),
        "confidence": round(result.confidence, 3),
        "recommendation": recommend(result.total_hsi),
        "limiting_factor": limiting_factor(result),
        "factors": {f.factor: round(f.suitability, 3) for f in result.factors},
    }


if __name__ == "__main__":
    # Example usage
    fc = generate_forecast("indian_mackerel")
    print(f"Zones: {len(fc.polygons)}  |  coverage {fc.grid_summary['coverage']:.1f}%")
    print(fc.advisory)
    point = analyze_location(9.5, 75.5, "indian_mackerel")
    print(f"Kerala coast HSI {point['total_hsi']:.2f}: {point['recommendation']}")
