"""
HSI Model — Habitat Suitability Index for one species at one sample.

    HSI = clamp( Σ weight_f × suitability_f , 0, 1 )

Each factor is scored with its own response curve (see FACTORS). Confidence
is computed separately from the plausibility of the raw values and is a
data-quality signal only; it never alters the HSI.
"""

import warnings
from dataclasses import dataclass
from typing import Callable

from config.constants import CONFIDENCE_FLOOR, CONFIDENCE_RULES, NEUTRAL_SUITABILITY
from config.species import get_species_profile
from models.domain import EnvironmentalSample, FactorScore, HSIResult, SpeciesProfile
from models.suitability_model import SuitabilityShape, score


@dataclass(frozen=True)
class Factor:
    name: str
    shape: SuitabilityShape
    accessor: Callable[[EnvironmentalSample], float]
    label: str
    unit: str


# Lookup table: factor → response curve + sample field.
FACTORS = {
    "sst": Factor("sst", SuitabilityShape.GAUSSIAN,
                  lambda s: s.sea_surface_temp, "Sea Surface Temp", "°C"),
    "chlorophyll": Factor("chlorophyll", SuitabilityShape.TRAPEZOIDAL,
                          lambda s: s.chlorophyll, "Chlorophyll-a", "mg/m³"),
    "depth": Factor("depth", SuitabilityShape.TRAPEZOIDAL,
                    lambda s: s.depth, "Depth", "m"),
    "dissolved_oxygen": Factor("dissolved_oxygen", SuitabilityShape.THRESHOLD,
                               lambda s: s.dissolved_oxygen, "Dissolved Oxygen", "mg/L"),
    "salinity": Factor("salinity", SuitabilityShape.GAUSSIAN,
                       lambda s: s.salinity, "Salinity", "PSU"),
}


def factor_suitability(factor: str, value: float, profile: SpeciesProfile) -> float:
    """
    Suitability of one factor value for a species.

    A factor the profile has no preference for scores NEUTRAL_SUITABILITY
    (0.5) and emits a warning instead of failing.
    """
    pref = profile.preferences.get(factor)
    fdef = FACTORS.get(factor)
    if pref is None or fdef is None:
        warnings.warn(
            f"No preference for factor '{factor}' in profile '{profile.id}'; "
            f"using neutral suitability {NEUTRAL_SUITABILITY}"
        )
        return NEUTRAL_SUITABILITY
    return score(value, pref, fdef.shape)


def compute_confidence(sample: EnvironmentalSample) -> float:
    """Start at 1.0, shrink for each implausible value, floor at 0.3."""
    confidence = 1.0
    for factor, lo, hi, multiplier in CONFIDENCE_RULES:
        value = FACTORS[factor].accessor(sample)
        if value < lo or value > hi:
            confidence *= multiplier
    return max(CONFIDENCE_FLOOR, confidence)


def compute_hsi(species, sample: EnvironmentalSample) -> HSIResult:
    """
    Args:
        species: species id or a SpeciesProfile
        sample: EnvironmentalSample at one coordinate

    Returns:
        HSIResult with one FactorScore per weighted factor.
    """
    profile = species if isinstance(species, SpeciesProfile) else get_species_profile(species)

    factors = []
    total = 0.0
    for name, fdef in FACTORS.items():
        weight = profile.weights.get(name, 0) or 0
        if weight == 0:
            continue

        value = fdef.accessor(sample)
        suitability = factor_suitability(name, value, profile)
        contribution = weight * suitability

        factors.append(FactorScore(
            factor=name,
            raw_value=value,
            suitability=suitability,
            weight=weight,
            contribution=contribution,
        ))
        total += contribution

    return HSIResult(
        coordinate=sample.coordinate,
        species=profile.id,
        total_hsi=min(1.0, max(0.0, total)),
        factors=tuple(factors),
        confidence=compute_confidence(sample),
        timestamp=sample.timestamp,
    )


def limiting_factor(result: HSIResult) -> str | None:
    """Factor with the lowest suitability (ties → heaviest weight)."""
    if not result.factors:
        return None
    worst = min(result.factors, key=lambda f: (f.suitability, -f.weight))
    return worst.factor
