"""Response-curve tests for the suitability model."""

import pytest

from models.domain import Preference
from models.suitability_model import (
    SuitabilityShape,
    gaussian_suitability,
    score,
    threshold_suitability,
    trapezoidal_suitability,
)


@pytest.mark.parametrize("lo,hi,opt", [(24, 31, 27.5), (20, 30, 25), (0.05, 0.5, 0.15), (10, 50, 40)])
def test_gaussian_peaks_at_optimal_and_is_zero_outside(lo, hi, opt):
    assert gaussian_suitability(opt, lo, hi, opt) == 1.0
    assert gaussian_suitability(lo - 0.01, lo, hi, opt) == 0.0
    assert gaussian_suitability(hi + 0.01, lo, hi, opt) == 0.0
    assert 0.0 < gaussian_suitability((lo + opt) / 2, lo, hi, opt) < 1.0


def test_gaussian_zero_width_range():
    assert gaussian_suitability(5.0, 5.0, 5.0, 5.0) == 1.0
    assert gaussian_suitability(5.1, 5.0, 5.0, 5.0) == 0.0


def test_trapezoid_plateau_and_flanks():
    # mackerel chlorophyll: plateau = 1.5 ± 0.705
    assert trapezoidal_suitability(1.5, 0.3, 5.0, 1.5) == 1.0
    assert trapezoidal_suitability(0.8, 0.3, 5.0, 1.5) == 1.0
    assert trapezoidal_suitability(2.2, 0.3, 5.0, 1.5) == 1.0
    assert trapezoidal_suitability(0.3, 0.3, 5.0, 1.5) == 0.0
    assert trapezoidal_suitability(5.0, 0.3, 5.0, 1.5) == 0.0

    low_flank = trapezoidal_suitability(0.5, 0.3, 5.0, 1.5)
    assert low_flank == pytest.approx((0.5 - 0.3) / (0.795 - 0.3))
    high_flank = trapezoidal_suitability(3.6, 0.3, 5.0, 1.5)
    assert high_flank == pytest.approx((5.0 - 3.6) / (5.0 - 2.205))


def test_threshold_bands():
    assert threshold_suitability(3.9, 4.0) == 0.0
    # the minimum itself is only marginal
    assert threshold_suitability(4.0, 4.0) == 0.5
    assert threshold_suitability(5.9, 4.0) == 0.5
    assert threshold_suitability(6.0, 4.0) == 1.0


def test_score_accepts_dict_or_preference():
    pref = Preference(min=24.0, max=31.0, optimal=27.5)
    as_dict = {"min": 24.0, "max": 31.0, "optimal": 27.5}
    for value in (23.0, 25.0, 27.5, 30.9):
        assert score(value, pref, SuitabilityShape.GAUSSIAN) == score(value, as_dict, SuitabilityShape.GAUSSIAN)


def test_score_stays_in_unit_interval():
    pref = {"min": 0.3, "max": 5.0, "optimal": 1.5}
    for shape in SuitabilityShape:
        for value in (-100, 0, 0.3, 1.0, 1.5, 4.9, 5.0, 1e6):
            assert 0.0 <= score(value, pref, shape) <= 1.0


def test_score_rejects_unknown_shape():
    with pytest.raises(ValueError):
        score(1.0, {"min": 0, "max": 2, "optimal": 1}, "sigmoid")
