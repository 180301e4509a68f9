"""
Advisory text for PFZ forecasts.

Template-based, no external language model:
    - build_advisory()        one-paragraph fisher advisory
    - build_zone_briefing()   longer markdown briefing, one bullet per zone
"""

import math

from config.constants import POTENTIAL_TIERS
from config.species import get_species_profile


def _fmt_number(value: float) -> str:
    """27.5 → '27.5', 40.0 → '40'"""
    return f"{value:g}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def top_zone(polygons):
    """Zone with the highest mean HSI; first one wins ties."""
    best = None
    for p in polygons:
        if best is None or p.mean_hsi > best.mean_hsi:
            best = p
    return best


def build_advisory(profile, polygons) -> str:
    if isinstance(profile, str):
        profile = get_species_profile(profile)

    if not polygons:
        return (
            f"No high-potential {profile.name} zones detected today. "
            f"Conditions may improve in the coming days."
        )

    best = top_zone(polygons)
    total_area = sum(p.area_km2 for p in polygons)
    sst_opt = profile.preferences["sst"].optimal
    depth_opt = profile.preferences["depth"].optimal

    return (
        f"{len(polygons)} potential {profile.name} zone(s) identified, covering approximately "
        f"{_round_half_up(total_area)} km². Best prospects near {best.nearest_port} "
        f"(HSI: {best.mean_hsi * 100:.0f}%). Optimal conditions: SST {_fmt_number(sst_opt)}°C, "
        f"Depth {_fmt_number(depth_opt)}m. Recommended gear: {', '.join(profile.target_fishery)}."
    )


def build_zone_briefing(forecast, max_zones: int = 5) -> str:
    """
    Multi-paragraph markdown briefing for a PFZForecast.

    Opening summary, then the strongest zones (by mean HSI) with location,
    size, environment and travel time, then a season note.
    """
    profile = get_species_profile(forecast.species)
    date_str = forecast.date.strftime("%d %B %Y")
    summary = forecast.grid_summary

    paragraphs = [
        f"**{profile.icon} {profile.name} — PFZ Advisory for {date_str}**\n\n"
        f"{forecast.advisory}"
    ]

    paragraphs.append(
        f"**Coverage:** {summary['high_potential_cells']:,} of {summary['total_cells']:,} grid cells "
        f"({summary['coverage']:.1f}%) are at high habitat suitability. "
        f"Forecast confidence is **{forecast.confidence:.0%}**."
    )

    ranked = sorted(forecast.polygons, key=lambda p: p.mean_hsi, reverse=True)[:max_zones]
    if ranked:
        lines = []
        for i, z in enumerate(ranked, 1):
            tier = POTENTIAL_TIERS[z.potential]["label"]
            env = z.environmental or {}
            env_bits = []
            if env.get("mean_sst") is not None:
                env_bits.append(f"SST {env['mean_sst']:.1f}°C")
            if env.get("mean_chlorophyll") is not None:
                env_bits.append(f"Chl {env['mean_chlorophyll']:.2f} mg/m³")
            if z.mean_depth is not None:
                env_bits.append(f"depth ~{z.mean_depth:.0f} m")
            env_text = f" — {', '.join(env_bits)}" if env_bits else ""
            lines.append(
                f"{i}. **{tier}** near {z.nearest_port} "
                f"({z.centroid.lat:.2f}°N, {z.centroid.lon:.2f}°E): "
                f"{z.area_km2:,.0f} km², mean HSI {z.mean_hsi:.2f} (max {z.max_hsi:.2f})"
                f"{env_text}; ~{z.distance_to_shore_km:.0f} km offshore"
                + (f", about {z.estimated_travel_time_hours:.1f} h steaming" if z.estimated_travel_time_hours else "")
                + "."
            )
        paragraphs.append("**Zones:**\n" + "\n".join(lines))

    month = forecast.date.month
    if month in profile.peak_seasons:
        paragraphs.append(f"**Season:** {forecast.date.strftime('%B')} is within the {profile.name} peak season.")
    else:
        paragraphs.append(
            f"**Season:** {forecast.date.strftime('%B')} is outside the {profile.name} peak season; "
            f"expect lower catch rates even in suitable habitat."
        )

    return "\n\n".join(paragraphs)
