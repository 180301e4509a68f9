"""
Suitability Model — ecological response curves.

Maps one environmental value onto a 0-1 suitability score:
    - Gaussian     bell-shaped tolerance (temperature, salinity)
    - Trapezoidal  plateau over the optimal band (chlorophyll, depth)
    - Threshold    survival cut-off (dissolved oxygen)

All functions are pure and total: no input raises, outputs stay in [0, 1].
"""

import math
from enum import Enum


class SuitabilityShape(Enum):
    GAUSSIAN = "gaussian"
    TRAPEZOIDAL = "trapezoidal"
    THRESHOLD = "threshold"


# Share of the [min, max] range scored 1.0 by the trapezoid
PLATEAU_FRACTION = 0.3
# Threshold curve: min ≤ value < min × MARGINAL_FACTOR is "marginal"
MARGINAL_FACTOR = 1.5
MARGINAL_SCORE = 0.5


def gaussian_suitability(value: float, min_v: float, max_v: float, optimal: float) -> float:
    """
    exp(-(value - optimal)² / 2σ²) with σ = (max - min) / 4, zero outside
    [min, max]. A zero-width range scores 1.0 only at the optimal.
    """
    if value < min_v or value > max_v:
        return 0.0

    sigma = (max_v - min_v) / 4
    if sigma == 0:
        return 1.0 if value == optimal else 0.0

    exponent = -((value - optimal) ** 2) / (2 * sigma ** 2)
    return math.exp(exponent)


def trapezoidal_suitability(value: float, min_v: float, max_v: float, optimal: float) -> float:
    """1.0 over the middle 30 % of the range centred on optimal, linear flanks."""
    if value < min_v or value > max_v:
        return 0.0

    optimal_range = (max_v - min_v) * PLATEAU_FRACTION
    optimal_min = optimal - optimal_range / 2
    optimal_max = optimal + optimal_range / 2

    if optimal_min <= value <= optimal_max:
        return 1.0

    if value < optimal_min:
        return (value - min_v) / (optimal_min - min_v)
    return (max_v - value) / (max_v - optimal_max)


def threshold_suitability(value: float, min_v: float) -> float:
    """
    0 below min, 0.5 between min and 1.5 × min, 1.0 above.

    value == min lands in the marginal band (0.5), not a clean pass.
    """
    if value < min_v:
        return 0.0
    if value < min_v * MARGINAL_FACTOR:
        return MARGINAL_SCORE
    return 1.0


def score(value: float, pref, shape: SuitabilityShape) -> float:
    """
    Score ``value`` against a preference (anything with min / max / optimal,
    either attributes or dict keys) using ``shape``.
    """
    if isinstance(pref, dict):
        min_v, max_v, optimal = pref["min"], pref["max"], pref["optimal"]
    else:
        min_v, max_v, optimal = pref.min, pref.max, pref.optimal

    if shape is SuitabilityShape.GAUSSIAN:
        s = gaussian_suitability(value, min_v, max_v, optimal)
    elif shape is SuitabilityShape.TRAPEZOIDAL:
        s = trapezoidal_suitability(value, min_v, max_v, optimal)
    elif shape is SuitabilityShape.THRESHOLD:
        s = threshold_suitability(value, min_v)
    else:
        raise ValueError(f"Unsupported suitability shape: {shape!r}")

    return min(1.0, max(0.0, s))
