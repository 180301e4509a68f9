"""
Target species for PFZWatch.
Each profile has display metadata, habitat preferences (min / max / optimal
per environmental factor) and factor weights for the HSI. Weights sum to 1.0.
"""

SPECIES_PROFILES = {
    "indian_mackerel": {
        "name": "Indian Mackerel",
        "scientific_name": "Rastrelliger kanagurta",
        "icon": "🐟",
        "color": "#3B82F6",
        "preferences": {
            "sst":              {"min": 24.0, "max": 31.0, "optimal": 27.5},  # °C
            "chlorophyll":      {"min": 0.3,  "max": 5.0,  "optimal": 1.5},   # mg/m³
            "depth":            {"min": 20.0, "max": 80.0, "optimal": 40.0},  # m
            "dissolved_oxygen": {"min": 4.0,  "max": 8.0,  "optimal": 6.0},   # mg/L
        },
        "weights": {"sst": 0.30, "chlorophyll": 0.30, "depth": 0.25, "dissolved_oxygen": 0.15},
        "peak_seasons": [9, 10, 11, 12, 1, 2],
        "economic_value": "high",
        "target_fishery": ["Ring seine", "Gill net", "Trawl"],
        "migration_patterns": "Coastal shoals moving inshore with post-monsoon productivity.",
    },
    "oil_sardine": {
        "name": "Oil Sardine",
        "scientific_name": "Sardinella longiceps",
        "icon": "🐠",
        "color": "#10B981",
        "preferences": {
            "sst":              {"min": 23.0, "max": 29.0, "optimal": 26.5},
            "chlorophyll":      {"min": 0.5,  "max": 8.0,  "optimal": 3.0},
            "depth":            {"min": 10.0, "max": 50.0, "optimal": 25.0},
            "dissolved_oxygen": {"min": 4.0,  "max": 8.0,  "optimal": 5.5},
        },
        "weights": {"sst": 0.25, "chlorophyll": 0.35, "depth": 0.25, "dissolved_oxygen": 0.15},
        "peak_seasons": [7, 8, 9, 10],  # monsoon upwelling
        "economic_value": "high",
        "target_fishery": ["Ring seine", "Boat seine"],
        "migration_patterns": "Follows upwelling fronts along the south-west coast.",
    },
    "yellowfin_tuna": {
        "name": "Yellowfin Tuna",
        "scientific_name": "Thunnus albacares",
        "icon": "🦈",
        "color": "#F59E0B",
        "preferences": {
            "sst":              {"min": 20.0,  "max": 30.0,   "optimal": 25.0},
            "chlorophyll":      {"min": 0.05,  "max": 0.5,    "optimal": 0.15},
            "depth":            {"min": 100.0, "max": 1000.0, "optimal": 400.0},
            "dissolved_oxygen": {"min": 3.0,   "max": 7.0,    "optimal": 5.0},
        },
        "weights": {"sst": 0.35, "chlorophyll": 0.15, "depth": 0.35, "dissolved_oxygen": 0.15},
        "peak_seasons": [1, 2, 3, 4, 10, 11, 12],
        "economic_value": "high",
        "target_fishery": ["Longline", "Purse seine"],
        "migration_patterns": "Oceanic; trans-basin movements along thermal fronts.",
    },
    "skipjack_tuna": {
        "name": "Skipjack Tuna",
        "scientific_name": "Katsuwonus pelamis",
        "icon": "🐬",
        "color": "#8B5CF6",
        "preferences": {
            "sst":              {"min": 22.0, "max": 30.0,  "optimal": 27.0},
            "chlorophyll":      {"min": 0.1,  "max": 0.8,   "optimal": 0.3},
            "depth":            {"min": 50.0, "max": 500.0, "optimal": 200.0},
            "dissolved_oxygen": {"min": 3.5,  "max": 7.0,   "optimal": 5.0},
        },
        "weights": {"sst": 0.30, "chlorophyll": 0.20, "depth": 0.30, "dissolved_oxygen": 0.20},
        "peak_seasons": [3, 4, 5, 9, 10, 11],
        "economic_value": "medium",
        "target_fishery": ["Pole and line", "Purse seine"],
        "migration_patterns": "Surface schools around Lakshadweep and oceanic islands.",
    },
    "threadfin_bream": {
        "name": "Threadfin Bream",
        "scientific_name": "Nemipterus japonicus",
        "icon": "🐡",
        "color": "#EC4899",
        "preferences": {
            "sst":              {"min": 22.0, "max": 28.0,  "optimal": 25.0},
            "chlorophyll":      {"min": 0.2,  "max": 2.0,   "optimal": 0.8},
            "depth":            {"min": 30.0, "max": 120.0, "optimal": 60.0},
            "dissolved_oxygen": {"min": 3.0,  "max": 7.0,   "optimal": 5.0},
        },
        "weights": {"sst": 0.20, "chlorophyll": 0.25, "depth": 0.40, "dissolved_oxygen": 0.15},
        "peak_seasons": [10, 11, 12, 1, 2, 3],
        "economic_value": "medium",
        "target_fishery": ["Trawl"],
        "migration_patterns": "Demersal; resident on the mid-shelf.",
    },
}

DEFAULT_SPECIES = "indian_mackerel"


def list_species() -> list[str]:
    return list(SPECIES_PROFILES.keys())


def get_species_profile(species_id: str):
    """Return the :class:`SpeciesProfile` value object for ``species_id``."""
    from models.domain import SpeciesProfile

    if species_id not in SPECIES_PROFILES:
        raise ValueError(
            f"Unknown species '{species_id}'. Expected one of: {', '.join(list_species())}"
        )
    return SpeciesProfile.from_dict(species_id, SPECIES_PROFILES[species_id])


def get_species_display_name(species_id: str) -> str:
    """'Indian Mackerel (Rastrelliger kanagurta)'"""
    p = SPECIES_PROFILES.get(species_id)
    if p is None:
        return species_id
    return f"{p['name']} ({p['scientific_name']})"


def validate_species_profiles(tolerance: float = 1e-6) -> dict[str, float]:
    """
    Check that each profile's weights sum to 1.0.

    Returns {species_id: weight_sum}; raises ValueError on the first
    profile outside tolerance.
    """
    sums = {}
    for key, profile in SPECIES_PROFILES.items():
        total = sum(profile["weights"].values())
        if abs(total - 1.0) > tolerance:
            raise ValueError(f"Weights for '{key}' sum to {total:.6f}, expected 1.0")
        sums[key] = total
    return sums
