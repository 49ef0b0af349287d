# © 2026 Aparajita Parihar. All rights reserved.
# AdoptionRisk Platform — Automated Testing Suite for the Adoption Engine

import math
import os
import sys

import numpy as np
import pytest

# Path setup: ensure the 'core' folder is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.adoption import (
    ConfigurationError,
    DEFAULT_HORIZON,
    area_under_curve,
    build_horizon,
    concentration_index,
    evaluate,
    generate_series,
    logistic,
    normalize_weights,
    peak_concentration,
    peak_velocity,
    propagate_cascade,
    time_to_threshold,
    timing_intervals,
    worst_cascade,
    _to_fixed,
)
from config.scenarios import DEFAULT_GENERATIONAL, DEFAULT_INDUSTRY, default_cohorts


# ─────────────────────────────────────────────────────────────────────────────
# 1. Logistic curve
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("t0,k", [(2023, 1.2), (2030, 0.6), (2025.5, -0.8), (0, 0.0)])
def test_logistic_is_half_at_inflection(t0, k):
    assert logistic(t0, t0, k) == pytest.approx(0.5)


def test_logistic_monotonic_in_steepness_sign():
    years = np.linspace(2000, 2060, 121)
    rising = [logistic(t, 2030, 0.9) for t in years]
    falling = [logistic(t, 2030, -0.9) for t in years]
    flat = [logistic(t, 2030, 0.0) for t in years]

    assert all(b >= a for a, b in zip(rising, rising[1:]))
    assert all(b <= a for a, b in zip(falling, falling[1:]))
    assert all(v == 0.5 for v in flat)


def test_logistic_saturates_instead_of_overflowing():
    """Huge k·(t − t0) must give the asymptote, never an exception or NaN."""
    assert logistic(2020, 2040, 100.0) == 0.0
    assert logistic(2040, 2020, 100.0) == 1.0
    assert logistic(2020, 2040, -100.0) == 1.0
    for value in (logistic(-1e6, 0, 1e3), logistic(1e6, 0, 1e3)):
        assert math.isfinite(value)


def test_to_fixed_rounds_ties_away_from_zero():
    assert _to_fixed(0.0625, 3) == 0.063
    assert _to_fixed(-0.0625, 3) == -0.063
    assert _to_fixed(0.4 * -0.1, 3) == -0.04


# ─────────────────────────────────────────────────────────────────────────────
# 2. Horizon & time series
# ─────────────────────────────────────────────────────────────────────────────
def test_default_horizon_is_2020_to_2040():
    assert DEFAULT_HORIZON[0] == 2020
    assert DEFAULT_HORIZON[-1] == 2040
    assert len(DEFAULT_HORIZON) == 21


def test_empty_horizon_is_configuration_error():
    with pytest.raises(ConfigurationError):
        build_horizon(2030, 2020)
    with pytest.raises(ConfigurationError):
        generate_series(DEFAULT_GENERATIONAL, ())


def test_descending_horizon_is_configuration_error():
    with pytest.raises(ConfigurationError):
        generate_series(DEFAULT_GENERATIONAL, (2022, 2021, 2023))


def test_horizon_with_gaps_is_configuration_error():
    with pytest.raises(ConfigurationError):
        generate_series(DEFAULT_GENERATIONAL, (2020, 2025, 2030))
    with pytest.raises(ConfigurationError):
        evaluate(*default_cohorts(), -0.1, horizon=(2020, 2025, 2030))


def test_series_share_horizon_and_keep_every_cohort():
    series = generate_series(DEFAULT_GENERATIONAL)
    assert list(series["adoption"]) == list(DEFAULT_GENERATIONAL)
    for name in DEFAULT_GENERATIONAL:
        adoption = series["adoption"][name]
        velocity = series["velocity"][name]
        assert [year for year, _ in adoption] == list(DEFAULT_HORIZON)
        assert len(velocity) == len(DEFAULT_HORIZON) - 1
        assert velocity[0][0] == DEFAULT_HORIZON[1]
        assert all(0 <= value <= 1 for _, value in adoption)


def test_velocity_is_difference_of_rounded_adoption():
    series = generate_series({"Gen Z": DEFAULT_GENERATIONAL["Gen Z"]})
    adoption = [v for _, v in series["adoption"]["Gen Z"]]
    velocity = [v for _, v in series["velocity"]["Gen Z"]]
    for i, vel in enumerate(velocity, start=1):
        assert vel == _to_fixed(adoption[i] - adoption[i - 1], 3)


def test_full_precision_velocity_mode_stays_within_rounding():
    cohorts = {"Gen X": DEFAULT_GENERATIONAL["Gen X"]}
    rounded = generate_series(cohorts)["velocity"]["Gen X"]
    precise = generate_series(cohorts, round_before_diff=False)["velocity"]["Gen X"]
    assert len(rounded) == len(precise)
    for (y1, a), (y2, b) in zip(rounded, precise):
        assert y1 == y2
        assert abs(a - b) <= 0.002


# ─────────────────────────────────────────────────────────────────────────────
# 3. Weight normalisation & concentration
# ─────────────────────────────────────────────────────────────────────────────
def test_normalize_weights_sums_to_one_without_mutating():
    cohorts = {"A": {"t0": 2025, "k": 1.0, "w": 2.0}, "B": {"t0": 2030, "k": 1.0, "w": 6.0}}
    normalized = normalize_weights(cohorts)
    assert normalized["A"]["w"] == pytest.approx(0.25)
    assert normalized["B"]["w"] == pytest.approx(0.75)
    assert cohorts["A"]["w"] == 2.0


def test_normalize_weights_is_idempotent():
    once = normalize_weights(DEFAULT_INDUSTRY)
    twice = normalize_weights(once)
    for name in once:
        assert twice[name]["w"] == pytest.approx(once[name]["w"])


def test_normalize_all_zero_weights_is_no_op():
    cohorts = {"A": {"t0": 2025, "k": 1.0, "w": 0.0}, "B": {"t0": 2030, "k": 1.0, "w": 0.0}}
    assert normalize_weights(cohorts) is cohorts
    hhi = concentration_index(cohorts, generate_series(cohorts)["adoption"])
    assert all(value == 0.0 for _, value in hhi)


def test_hhi_equal_weights_example():
    """Two cohorts, weight 0.5 each, adoption 0.6 → (0.5 × 0.6)² × 2 = 0.18."""
    cohorts = {"A": {"t0": 0, "k": 0, "w": 0.5}, "B": {"t0": 0, "k": 0, "w": 0.5}}
    adoption = {"A": [(2020, 0.6)], "B": [(2020, 0.6)]}
    assert concentration_index(cohorts, adoption, (2020,)) == [(2020, pytest.approx(0.18))]


def test_hhi_invariant_to_uniform_weight_rescaling():
    scaled = {name: {**p, "w": p["w"] * 7.5} for name, p in DEFAULT_GENERATIONAL.items()}
    adoption = generate_series(DEFAULT_GENERATIONAL)["adoption"]
    base = concentration_index(DEFAULT_GENERATIONAL, adoption)
    rescaled = concentration_index(scaled, adoption)
    for (_, a), (_, b) in zip(base, rescaled):
        assert a == pytest.approx(b, abs=1e-4)


def test_hhi_requires_cohorts():
    with pytest.raises(ConfigurationError):
        concentration_index({}, {})


# ─────────────────────────────────────────────────────────────────────────────
# 4. Cascade
# ─────────────────────────────────────────────────────────────────────────────
def test_cascade_finance_example():
    rows = propagate_cascade(["Finance"], -0.1)
    assert rows == [{"sector": "Finance", "delta": -0.04}]


def test_cascade_default_sectors():
    rows = propagate_cascade(DEFAULT_INDUSTRY.keys(), -0.1)
    assert rows == [
        {"sector": "Finance", "delta": -0.04},
        {"sector": "Manufacturing", "delta": -0.03},
        {"sector": "Healthcare", "delta": -0.02},
    ]


def test_cascade_accepts_unclamped_shock():
    rows = propagate_cascade(["Manufacturing"], 2.0)
    assert rows[0]["delta"] == pytest.approx(0.6)


def test_cascade_missing_source_entry_is_fatal():
    exposure = {"Retail": {"Manufacturing": 0.2}}
    with pytest.raises(ConfigurationError):
        propagate_cascade(["Retail"], -0.1, exposure=exposure)


def test_cascade_sector_without_row_is_configuration_error():
    with pytest.raises(ConfigurationError, match="Retail"):
        propagate_cascade(["Finance", "Retail"], -0.1)


def test_evaluate_fails_for_industry_sector_without_exposure_row():
    gens, inds = default_cohorts()
    inds["Retail"] = {"t0": 2026, "k": 0.9, "w": 0.2, "color": "#123456"}
    with pytest.raises(ConfigurationError):
        evaluate(gens, inds, -0.1)


# ─────────────────────────────────────────────────────────────────────────────
# 5. Threshold, AUC, peaks, intervals
# ─────────────────────────────────────────────────────────────────────────────
def test_time_to_threshold_gen_z_example():
    """ln(9) / 1.2 ≈ 1.83 years after 2023 → first whole year is 2025."""
    assert time_to_threshold(DEFAULT_GENERATIONAL["Gen Z"]) == 2025


def test_time_to_threshold_not_reached_is_none():
    assert time_to_threshold({"t0": 2040, "k": 0.6}) is None
    assert time_to_threshold({"t0": 2025, "k": 0.0}) is None


def test_time_to_threshold_non_decreasing_in_threshold():
    params = DEFAULT_GENERATIONAL["Boomers"]
    previous = -math.inf
    for threshold in np.linspace(0.1, 0.99, 30):
        year = time_to_threshold(params, threshold=threshold)
        current = math.inf if year is None else year
        assert current >= previous
        previous = current


def test_auc_symmetric_curve():
    """A curve centred on the horizon midpoint covers exactly half the area."""
    assert area_under_curve({"t0": 2030, "k": 1.0}) == pytest.approx(10.0)


def test_auc_grows_with_horizon_length():
    params = DEFAULT_INDUSTRY["Healthcare"]
    short = area_under_curve(params, build_horizon(2020, 2030))
    long = area_under_curve(params, build_horizon(2020, 2040))
    assert long >= short


def test_auc_single_point_horizon_is_zero():
    assert area_under_curve({"t0": 2025, "k": 1.0}, (2025,)) == 0.0


def test_peak_velocity_tie_takes_earliest_year():
    velocity = {"A": [(2021, 0.1), (2022, 0.3), (2023, 0.3), (2024, 0.2)]}
    assert peak_velocity(velocity)["A"] == {"year": 2022, "value": 0.3, "has_data": True}


def test_peak_velocity_empty_series_sentinel():
    peak = peak_velocity({"A": []})["A"]
    assert peak == {"year": 0, "value": 0.0, "has_data": False}


def test_peak_concentration_earliest_max():
    series = [(2020, 0.1), (2021, 0.3), (2022, 0.3), (2023, 0.2)]
    assert peak_concentration(series) == {"year": 2021, "value": 0.3, "has_data": True}
    assert peak_concentration([])["has_data"] is False


def test_worst_cascade_picks_most_negative_first():
    rows = [
        {"sector": "A", "delta": -0.02},
        {"sector": "B", "delta": -0.05},
        {"sector": "C", "delta": -0.05},
    ]
    assert worst_cascade(rows) == {"sector": "B", "delta": -0.05}


def test_worst_cascade_empty_sentinel():
    assert worst_cascade([]) == {"sector": "N/A", "delta": 0}


def test_timing_intervals_with_and_without_threshold():
    cohorts = {"Fast": {"t0": 2023, "k": 1.2, "w": 1}, "Flat": {"t0": 2025, "k": 0.0, "w": 1}}
    peaks = {"Fast": {"year": 2023}, "Flat": {"year": 2021}}
    thresholds = {"Fast": 2025, "Flat": None}
    intervals = timing_intervals(cohorts, peaks, thresholds)
    assert intervals["Fast"] == {"toPeak": 0, "peakTo90": 2}
    assert intervals["Flat"] == {"toPeak": -4, "peakTo90": 0}


# ─────────────────────────────────────────────────────────────────────────────
# 6. Full evaluation
# ─────────────────────────────────────────────────────────────────────────────
def test_evaluate_bundle_shape():
    gens, inds = default_cohorts()
    bundle = evaluate(gens, inds, -0.1)

    for key in ("adoption", "velocity", "hhi"):
        assert key in bundle["generational"]
        assert key in bundle["industry"]
    assert "cascade" in bundle["industry"]
    assert "cascade" not in bundle["generational"]
    assert len(bundle["generational"]["hhi"]) == 21

    analytics = bundle["analytics"]
    assert analytics["timeToThreshold"]["generational"]["Gen Z"] == 2025
    assert set(analytics["auc"]["industry"]) == set(inds)
    assert set(analytics["intervals"]["generational"]) == set(gens)
    assert analytics["worstCascade"] == {"sector": "Finance", "delta": -0.04}
    assert analytics["peakConcentration"]["industry"]["has_data"] is True


def test_evaluate_is_idempotent_and_returns_copies():
    gens, inds = default_cohorts()
    first = evaluate(gens, inds, -0.1)
    first["industry"]["cascade"].clear()
    first["analytics"]["auc"]["generational"]["Gen Z"] = -1

    second = evaluate(gens, inds, -0.1)
    assert len(second["industry"]["cascade"]) == 3
    assert second["analytics"]["auc"]["generational"]["Gen Z"] > 0


def test_evaluate_does_not_mutate_inputs():
    gens, inds = default_cohorts()
    evaluate(gens, inds, 0.25)
    assert (gens, inds) == default_cohorts()


def test_evaluate_zero_steepness_cohort():
    gens, inds = default_cohorts()
    gens["Boomers"]["k"] = 0.0
    bundle = evaluate(gens, inds, -0.1)
    assert all(v == 0.5 for _, v in bundle["generational"]["adoption"]["Boomers"])
    assert bundle["analytics"]["timeToThreshold"]["generational"]["Boomers"] is None
    assert bundle["analytics"]["intervals"]["generational"]["Boomers"]["peakTo90"] == 0
    assert bundle["analytics"]["peakVelocity"]["generational"]["Boomers"]["year"] == 2021


def test_evaluate_custom_horizon_and_threshold():
    gens, inds = default_cohorts()
    bundle = evaluate(gens, inds, -0.1, horizon=build_horizon(2020, 2030), threshold=0.5)
    assert bundle["horizon"] == list(range(2020, 2031))
    assert bundle["analytics"]["timeToThreshold"]["generational"]["Gen Z"] == 2023


def test_evaluate_empty_set_is_configuration_error():
    gens, _ = default_cohorts()
    with pytest.raises(ConfigurationError):
        evaluate(gens, {}, -0.1)


def test_evaluate_rejects_negative_weight():
    gens, inds = default_cohorts()
    gens["Gen Z"]["w"] = -0.1
    with pytest.raises(ValueError):
        evaluate(gens, inds, -0.1)


def test_evaluate_missing_exposure_entry_fails_whole_call(monkeypatch):
    import core.adoption as adoption
    monkeypatch.setattr(adoption, "EXPOSURE_MATRIX", {"Finance": {"Healthcare": 0.1}})
    adoption._evaluate_cached.cache_clear()
    gens, inds = default_cohorts()
    try:
        with pytest.raises(ConfigurationError):
            adoption.evaluate(gens, {"Finance": inds["Finance"]}, -0.3)
    finally:
        adoption._evaluate_cached.cache_clear()
