# ═══════════════════════════════════════════════════════════════════════════════
# AdoptionRisk Platform — Default Cohort Registry
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single source of truth for:
#   • DEFAULT_GENERATIONAL: generational cohort set loaded on first run
#   • DEFAULT_INDUSTRY    : industry sector cohort set loaded on first run
#
# Each cohort: t0 = inflection year, k = steepness, w = relative weight,
# color = chart colour (presentation only, never used in computation).
#
# This file has ZERO Streamlit and ZERO network imports.
# It is safe to import in unit tests and CLI contexts.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import copy

from config.constants import EXPOSURE_MATRIX, SHOCK_SOURCE_SECTOR

# ─────────────────────────────────────────────────────────────────────────────
# GENERATIONAL COHORTS
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_GENERATIONAL: dict[str, dict] = {
    "Gen Z":       {"t0": 2023, "k": 1.2, "w": 0.20, "color": "#8884d8"},
    "Millennials": {"t0": 2025, "k": 1.0, "w": 0.35, "color": "#82ca9d"},
    "Gen X":       {"t0": 2027, "k": 0.8, "w": 0.25, "color": "#ffc658"},
    "Boomers":     {"t0": 2030, "k": 0.6, "w": 0.20, "color": "#ff8042"},
}


# ─────────────────────────────────────────────────────────────────────────────
# INDUSTRY COHORTS
# Every sector here must have a row in EXPOSURE_MATRIX (checked below).
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_INDUSTRY: dict[str, dict] = {
    "Finance":       {"t0": 2022, "k": 1.1, "w": 0.3, "color": "#0088FE"},
    "Manufacturing": {"t0": 2025, "k": 0.9, "w": 0.3, "color": "#00C49F"},
    "Healthcare":    {"t0": 2028, "k": 0.7, "w": 0.4, "color": "#FFBB28"},
}


def default_cohorts() -> tuple[dict[str, dict], dict[str, dict]]:
    """Return fresh deep copies of both default sets, safe for callers to edit."""
    return copy.deepcopy(DEFAULT_GENERATIONAL), copy.deepcopy(DEFAULT_INDUSTRY)


# ─────────────────────────────────────────────────────────────────────────────
# INTEGRITY ASSERTION (runs at import time)
# Raises AssertionError immediately if a default sector cannot be cascaded.
# ─────────────────────────────────────────────────────────────────────────────

def _assert_exposure_integrity() -> None:
    for sector in DEFAULT_INDUSTRY:
        assert sector in EXPOSURE_MATRIX, (
            f"config/scenarios.py integrity error: "
            f"industry sector '{sector}' has no exposure matrix row"
        )
        assert SHOCK_SOURCE_SECTOR in EXPOSURE_MATRIX[sector], (
            f"config/scenarios.py integrity error: "
            f"sector '{sector}' has no '{SHOCK_SOURCE_SECTOR}' exposure entry"
        )


_assert_exposure_integrity()
