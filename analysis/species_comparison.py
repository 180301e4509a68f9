"""
Multi-Species Comparison — compare 2-3 species side-by-side for one date.
"""

from datetime import datetime

from config.constants import MAX_COMPARISON_SPECIES
from config.species import get_species_profile
from data_fetch.ocean_provider import OceanSampleProvider

from analysis.pfz_forecast import generate_forecast


def compare_species(
    species_ids: list[str],
    date: datetime | None = None,
    provider: OceanSampleProvider | None = None,
    forecasts: dict | None = None,
) -> dict:
    """
    Args:
        species_ids: up to MAX_COMPARISON_SPECIES species ids (extras ignored)
        date: forecast date
        provider: shared sample source
        forecasts: optional precomputed {species_id: PFZForecast}

    Returns:
        dict with available, species (per-species stats), ranking
    """
    ids = list(dict.fromkeys(species_ids))[:MAX_COMPARISON_SPECIES]
    if not ids:
        return {"available": False, "species": [], "ranking": []}

    date = date or datetime.now()
    forecasts = dict(forecasts or {})

    rows = []
    for sid in ids:
        profile = get_species_profile(sid)
        fc = forecasts.get(sid) or generate_forecast(sid, date, provider=provider)
        zones = fc.polygons
        rows.append({
            "key": sid,
            "name": profile.name,
            "color": profile.color,
            "zone_count": len(zones),
            "high_zones": sum(1 for z in zones if z.potential == "high"),
            "total_area_km2": round(sum(z.area_km2 for z in zones), 1),
            "best_hsi": round(max((z.max_hsi for z in zones), default=0.0), 3),
            "coverage": round(fc.grid_summary["coverage"], 2),
            "confidence": round(fc.confidence, 3),
            "in_season": date.month in profile.peak_seasons,
        })

    ranking = sorted(rows, key=lambda r: (r["best_hsi"], r["total_area_km2"]), reverse=True)

    return {
        "available": True,
        "species": rows,
        "ranking": [
            {"rank": i + 1, "key": r["key"], "best_hsi": r["best_hsi"], "zone_count": r["zone_count"]}
            for i, r in enumerate(ranking)
        ],
    }
