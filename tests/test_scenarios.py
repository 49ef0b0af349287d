# © 2026 Aparajita Parihar. All rights reserved.
# AdoptionRisk Platform — Default cohort registry checks

import pytest

from config.constants import EXPOSURE_MATRIX, SHOCK_SOURCE_SECTOR
from config.scenarios import DEFAULT_GENERATIONAL, DEFAULT_INDUSTRY, default_cohorts


@pytest.mark.parametrize("cohorts", [DEFAULT_GENERATIONAL, DEFAULT_INDUSTRY])
def test_default_cohorts_have_required_fields(cohorts):
    for name, params in cohorts.items():
        for field in ("t0", "k", "w", "color"):
            assert field in params, f"{name}: missing field '{field}'"
        assert 2020 <= params["t0"] <= 2040
        assert params["k"] > 0
        assert params["w"] >= 0


@pytest.mark.parametrize("cohorts", [DEFAULT_GENERATIONAL, DEFAULT_INDUSTRY])
def test_default_weights_sum_to_one(cohorts):
    assert sum(p["w"] for p in cohorts.values()) == pytest.approx(1.0)


def test_every_default_sector_is_exposed_to_shock_source():
    for sector in DEFAULT_INDUSTRY:
        assert SHOCK_SOURCE_SECTOR in EXPOSURE_MATRIX[sector]


def test_default_cohorts_returns_independent_copies():
    gens, inds = default_cohorts()
    gens["Gen Z"]["k"] = 2.9
    inds.pop("Finance")
    assert DEFAULT_GENERATIONAL["Gen Z"]["k"] == 1.2
    assert "Finance" in DEFAULT_INDUSTRY
