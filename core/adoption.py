# ═══════════════════════════════════════════════════════════════════════════════
# AdoptionRisk Platform — Core Adoption Engine
# © 2026 Aparajita Parihar. All rights reserved.
#
# Logistic adoption curves per cohort, velocity, Herfindahl-Hirschman
# concentration, first-order Finance shock cascade and timing analytics.
# Pure functions of their explicit inputs: no Streamlit, no network, no I/O.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import copy
import functools
import json
import logging
import math
from decimal import Decimal, ROUND_HALF_UP

from config.constants import (
    HORIZON_START_YEAR,
    HORIZON_END_YEAR,
    ADOPTION_THRESHOLD,
    ADOPTION_DECIMALS,
    VELOCITY_DECIMALS,
    CONCENTRATION_DECIMALS,
    CASCADE_DECIMALS,
    AUC_DECIMALS,
    EXPOSURE_MATRIX,
    SHOCK_SOURCE_SECTOR,
    NO_CASCADE_SECTOR,
)

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Fatal configuration problem: empty horizon, empty cohort set, missing exposure entry."""


# ─────────────────────────────────────────────────────────────────────────────
# NUMERIC HELPERS
# ─────────────────────────────────────────────────────────────────────────────

def _to_fixed(value: float, places: int) -> float:
    """Round half away from zero on the exact binary value of ``value``.

    Matches fixed-point display formatting, where Python's ``round()`` would
    round exact ties to even.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def logistic(t: float, t0: float, k: float) -> float:
    """Adoption fraction ``1 / (1 + exp(-k (t - t0)))`` at year ``t``.

    k = 0 gives a flat 0.5 and negative k mirrors the curve. When the
    exponential overflows the curve has reached its lower asymptote, so 0.0
    is returned instead of raising.
    """
    try:
        return 1.0 / (1.0 + math.exp(-k * (t - t0)))
    except OverflowError:
        return 0.0


def build_horizon(start: int = HORIZON_START_YEAR, end: int = HORIZON_END_YEAR) -> tuple[int, ...]:
    """Inclusive, contiguous, ascending sequence of years ``start..end``."""
    horizon = tuple(range(int(start), int(end) + 1))
    _validate_horizon(horizon)
    return horizon


# ─────────────────────────────────────────────────────────────────────────────
# INPUT VALIDATION
# ─────────────────────────────────────────────────────────────────────────────

def _validate_horizon(horizon) -> None:
    if len(horizon) == 0:
        raise ConfigurationError("horizon must contain at least one year.")
    for prev, curr in zip(horizon, horizon[1:]):
        if curr != prev + 1:
            raise ConfigurationError(
                f"horizon must be contiguous ascending years (found {prev} followed by {curr})."
            )


DEFAULT_HORIZON: tuple[int, ...] = build_horizon()


def _validate_cohort_set(cohorts: dict, label: str) -> None:
    """Hard validation of the numeric domain of every cohort in a set."""
    if not cohorts:
        raise ConfigurationError(f"{label} cohort set must contain at least one cohort.")
    for name, params in cohorts.items():
        for key in ("t0", "k", "w"):
            if key not in params:
                raise ValueError(f"{label} cohort '{name}' is missing '{key}'.")
        if not math.isfinite(float(params["t0"])):
            raise ValueError(f"{label} cohort '{name}': t0 must be a finite number.")
        if not math.isfinite(float(params["k"])):
            raise ValueError(f"{label} cohort '{name}': k must be a finite number.")
        weight = float(params["w"])
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(f"{label} cohort '{name}': w must be a finite number >= 0.")


# ─────────────────────────────────────────────────────────────────────────────
# TIME SERIES
# ─────────────────────────────────────────────────────────────────────────────

def generate_series(cohorts: dict, horizon=DEFAULT_HORIZON, *, round_before_diff: bool = True) -> dict:
    """
    Evaluate every cohort across the horizon.

    Returns ``{"adoption": {name: [(year, value), ...]}, "velocity": {...}}``.
    Adoption values are rounded for display stability. Velocity at year i is
    adoption[i] - adoption[i-1], taken from the rounded series unless
    ``round_before_diff`` is False, in which case full-precision values are
    differenced and only the result is rounded. Velocity has no entry for the
    first horizon year.
    """
    _validate_horizon(horizon)
    adoption: dict[str, list[tuple[int, float]]] = {}
    velocity: dict[str, list[tuple[int, float]]] = {}

    for name, params in cohorts.items():
        raw = [logistic(year, params["t0"], params["k"]) for year in horizon]
        rounded = [_to_fixed(v, ADOPTION_DECIMALS) for v in raw]
        basis = rounded if round_before_diff else raw

        adoption[name] = list(zip(horizon, rounded))
        velocity[name] = [
            (horizon[i], _to_fixed(basis[i] - basis[i - 1], VELOCITY_DECIMALS))
            for i in range(1, len(horizon))
        ]

    return {"adoption": adoption, "velocity": velocity}


# ─────────────────────────────────────────────────────────────────────────────
# CONCENTRATION
# ─────────────────────────────────────────────────────────────────────────────

def normalize_weights(cohorts: dict) -> dict:
    """Rescale weights to sum to 1. A zero total returns the input unchanged."""
    total_weight = sum(params["w"] for params in cohorts.values())
    if total_weight == 0:
        return cohorts
    return {
        name: {**params, "w": params["w"] / total_weight}
        for name, params in cohorts.items()
    }


def concentration_index(cohorts: dict, adoption: dict, horizon=DEFAULT_HORIZON) -> list[tuple[int, float]]:
    """
    Herfindahl-Hirschman style index per horizon year:
    HHI(year) = Σ (normalised weight × adoption at year)²
    """
    if not cohorts:
        raise ConfigurationError("concentration index needs at least one cohort.")
    missing = [name for name in cohorts if name not in adoption]
    if missing:
        raise ConfigurationError(f"no adoption series for cohorts: {missing}")

    normalized = normalize_weights(cohorts)
    levels = {name: [value for _, value in adoption[name]] for name in cohorts}

    series = []
    for i, year in enumerate(horizon):
        total = 0.0
        for name, params in normalized.items():
            total += (params["w"] * levels[name][i]) ** 2
        series.append((year, _to_fixed(total, CONCENTRATION_DECIMALS)))
    return series


# ─────────────────────────────────────────────────────────────────────────────
# CASCADE
# ─────────────────────────────────────────────────────────────────────────────

def propagate_cascade(
    sectors,
    shock: float,
    exposure: dict | None = None,
    source: str = SHOCK_SOURCE_SECTOR,
) -> list[dict]:
    """
    First-order contagion of a shock in ``source`` into each sector:
    delta = exposure[sector][source] × shock

    Linear and non-recursive: secondary X → Y effects are not modelled.
    A sector without an exposure row, or a row without a ``source`` entry,
    is a configuration error.
    """
    exposure = EXPOSURE_MATRIX if exposure is None else exposure
    rows = []
    for sector in sectors:
        row = exposure.get(sector)
        if row is None:
            raise ConfigurationError(f"exposure matrix has no row for sector '{sector}'.")
        if source not in row:
            raise ConfigurationError(
                f"exposure matrix has no '{source}' entry for sector '{sector}'."
            )
        rows.append({"sector": sector, "delta": _to_fixed(row[source] * shock, CASCADE_DECIMALS)})
    return rows


# ─────────────────────────────────────────────────────────────────────────────
# SCALAR ANALYTICS
# ─────────────────────────────────────────────────────────────────────────────

def _no_data_peak() -> dict:
    return {"year": 0, "value": 0.0, "has_data": False}


def time_to_threshold(params: dict, horizon=DEFAULT_HORIZON, threshold: float = ADOPTION_THRESHOLD) -> int | None:
    """First horizon year whose full-precision adoption is >= threshold, else None."""
    for year in horizon:
        if logistic(year, params["t0"], params["k"]) >= threshold:
            return year
    return None


def area_under_curve(params: dict, horizon=DEFAULT_HORIZON) -> float:
    """Trapezoidal area under the adoption curve, in adoption-years."""
    auc = 0.0
    for i in range(1, len(horizon)):
        t_prev, t_curr = horizon[i - 1], horizon[i]
        a_prev = logistic(t_prev, params["t0"], params["k"])
        a_curr = logistic(t_curr, params["t0"], params["k"])
        auc += ((a_prev + a_curr) / 2) * (t_curr - t_prev)
    return _to_fixed(auc, AUC_DECIMALS)


def peak_velocity(velocity: dict) -> dict[str, dict]:
    """Per cohort, the earliest (year, value) with the maximum velocity."""
    peaks = {}
    for name, series in velocity.items():
        if not series:
            peaks[name] = _no_data_peak()
            continue
        year, value = series[0]
        for y, v in series[1:]:
            if v > value:
                year, value = y, v
        peaks[name] = {"year": year, "value": value, "has_data": True}
    return peaks


def peak_concentration(series: list[tuple[int, float]]) -> dict:
    """Earliest (year, value) at which the concentration index is highest."""
    if not series:
        return _no_data_peak()
    values = [value for _, value in series]
    peak_value = max(values)
    peak_index = values.index(peak_value)
    return {"year": series[peak_index][0], "value": peak_value, "has_data": True}


def worst_cascade(rows: list[dict]) -> dict:
    """Cascade row with the most negative delta; first occurrence wins ties."""
    if not rows:
        return {"sector": NO_CASCADE_SECTOR, "delta": 0}
    worst = rows[0]
    for row in rows[1:]:
        if row["delta"] < worst["delta"]:
            worst = row
    return dict(worst)


def timing_intervals(cohorts: dict, peaks: dict, thresholds: dict) -> dict[str, dict]:
    """
    toPeak   = peak velocity year - t0
    peakTo90 = threshold year - peak velocity year

    When the threshold is never reached the peak year stands in for the
    threshold year, so peakTo90 collapses to 0.
    """
    intervals = {}
    for name, params in cohorts.items():
        peak_year = peaks[name]["year"]
        th_year = thresholds.get(name)
        if th_year is None:
            th_year = peak_year
        intervals[name] = {"toPeak": peak_year - params["t0"], "peakTo90": th_year - peak_year}
    return intervals


# ─────────────────────────────────────────────────────────────────────────────
# SCENARIO ORCHESTRATION
# ─────────────────────────────────────────────────────────────────────────────

def _evaluate_set(cohorts: dict, horizon: tuple, threshold: float, round_before_diff: bool) -> tuple[dict, dict]:
    """Series and per-cohort analytics for one cohort set."""
    series = generate_series(cohorts, horizon, round_before_diff=round_before_diff)
    hhi = concentration_index(cohorts, series["adoption"], horizon)

    thresholds = {name: time_to_threshold(p, horizon, threshold) for name, p in cohorts.items()}
    auc = {name: area_under_curve(p, horizon) for name, p in cohorts.items()}
    peaks = peak_velocity(series["velocity"])

    set_series = {"adoption": series["adoption"], "velocity": series["velocity"], "hhi": hhi}
    set_analytics = {
        "timeToThreshold": thresholds,
        "auc": auc,
        "peakVelocity": peaks,
        "peakConcentration": peak_concentration(hhi),
        "intervals": timing_intervals(cohorts, peaks, thresholds),
    }
    return set_series, set_analytics


def _evaluate_impl(
    generational: dict,
    industry: dict,
    shock: float,
    horizon: tuple,
    threshold: float,
    round_before_diff: bool,
) -> dict:
    """
    Internal implementation of the full pipeline.
    """
    _validate_horizon(horizon)
    _validate_cohort_set(generational, "generational")
    _validate_cohort_set(industry, "industry")
    if not math.isfinite(float(shock)):
        raise ValueError("shock must be a finite number.")
    logger.debug(
        "Evaluating %d generational and %d industry cohorts over %d years",
        len(generational), len(industry), len(horizon),
    )

    gen_series, gen_analytics = _evaluate_set(generational, horizon, threshold, round_before_diff)
    ind_series, ind_analytics = _evaluate_set(industry, horizon, threshold, round_before_diff)

    cascade = propagate_cascade(industry.keys(), shock)
    ind_series["cascade"] = cascade

    analytics = {
        key: {"generational": gen_analytics[key], "industry": ind_analytics[key]}
        for key in gen_analytics
    }
    analytics["worstCascade"] = worst_cascade(cascade)

    return {
        "horizon": list(horizon),
        "generational": gen_series,
        "industry": ind_series,
        "analytics": analytics,
    }


@functools.lru_cache(maxsize=256)
def _evaluate_cached(
    generational_json: str,
    industry_json: str,
    shock: float,
    horizon: tuple,
    threshold: float,
    round_before_diff: bool,
) -> dict:
    """Cached internal implementation using hashable inputs."""
    return _evaluate_impl(
        json.loads(generational_json),
        json.loads(industry_json),
        shock,
        horizon,
        threshold,
        round_before_diff,
    )


def _make_cache_key(generational: dict, industry: dict, shock: float, horizon, threshold: float, round_before_diff: bool) -> tuple:
    """Create a hashable key from the mutable cohort dictionaries.

    Cohort order is part of the key: it fixes output order and tie-breaks.
    """
    return (
        json.dumps(generational),
        json.dumps(industry),
        float(shock),
        tuple(horizon),
        float(threshold),
        bool(round_before_diff),
    )


def evaluate(
    generational: dict,
    industry: dict,
    shock: float,
    *,
    horizon=None,
    threshold: float = ADOPTION_THRESHOLD,
    round_before_diff: bool = True,
) -> dict:
    """
    Public entry point for the adoption engine with LRU caching.

    Recomputes the whole bundle from the (generational, industry, shock)
    triple: adoption, velocity and HHI series for both sets, the industry
    cascade, and analytics keyed by set then cohort name.

    Raises ConfigurationError for an empty horizon, an empty cohort set or a
    missing exposure entry, and ValueError for out-of-domain parameters.
    """
    horizon = DEFAULT_HORIZON if horizon is None else horizon
    key = _make_cache_key(generational, industry, shock, horizon, threshold, round_before_diff)

    # Deep copy so the cached bundle is never mutated by the caller
    return copy.deepcopy(_evaluate_cached(*key))
