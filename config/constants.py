# ═══════════════════════════════════════════════════════════════════════════════
# AdoptionRisk Platform — Canonical Constants Registry
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single source of truth for horizon, threshold, rounding, exposure and
# AI-integration constants. All modules MUST import from here; never
# redefine constants locally.
#
# This file has ZERO Streamlit, ZERO network, and ZERO side-effect imports.
# It is safe to import in any context, including unit tests without a
# running Streamlit server.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

# ─────────────────────────────────────────────────────────────────────────────
# HORIZON & THRESHOLD
# Sourced from: core/adoption.py
# ─────────────────────────────────────────────────────────────────────────────

HORIZON_START_YEAR: int = 2020
HORIZON_END_YEAR: int   = 2040   # inclusive → 21 points

# Adoption fraction treated as "saturated" for time-to-threshold
ADOPTION_THRESHOLD: float = 0.9


# ─────────────────────────────────────────────────────────────────────────────
# ROUNDING PRECISION (decimal places)
# Fixed for output compatibility across charts, tables and tests.
# ─────────────────────────────────────────────────────────────────────────────

ADOPTION_DECIMALS: int      = 3
VELOCITY_DECIMALS: int      = 3
CONCENTRATION_DECIMALS: int = 4
CASCADE_DECIMALS: int       = 3
AUC_DECIMALS: int           = 2


# ─────────────────────────────────────────────────────────────────────────────
# CROSS-SECTOR EXPOSURE MATRIX
# EXPOSURE_MATRIX[target][source]: share of a shock in `source` passed
# through to `target`. Only first-order Finance → X exposure is propagated.
# ─────────────────────────────────────────────────────────────────────────────

SHOCK_SOURCE_SECTOR: str = "Finance"

EXPOSURE_MATRIX: dict[str, dict[str, float]] = {
    "Finance":       {"Finance": 0.4, "Manufacturing": 0.2, "Healthcare": 0.1},
    "Manufacturing": {"Finance": 0.3, "Manufacturing": 0.1, "Healthcare": 0.2},
    "Healthcare":    {"Finance": 0.2, "Manufacturing": 0.3, "Healthcare": 0.1},
}

# Sentinel row reported when there is no cascade to rank
NO_CASCADE_SECTOR: str = "N/A"


# ─────────────────────────────────────────────────────────────────────────────
# SLIDER RANGES (min, max, step)
# Sourced from: app/sidebar.py
# ─────────────────────────────────────────────────────────────────────────────

T0_RANGE: tuple[int, int, int]           = (2020, 2040, 1)
K_RANGE: tuple[float, float, float]      = (0.1, 3.0, 0.1)
W_RANGE: tuple[float, float, float]      = (0.0, 1.0, 0.01)
SHOCK_RANGE: tuple[float, float, float]  = (-0.5, 0.5, 0.01)

DEFAULT_SHOCK: float = -0.1


# ─────────────────────────────────────────────────────────────────────────────
# AI NARRATIVE ANALYSIS
# Sourced from: core/agent.py
# ─────────────────────────────────────────────────────────────────────────────

GEMINI_MODEL: str = "gemini-2.5-flash"
GEMINI_URL: str   = (
    f"https://generativelanguage.googleapis.com/v1beta/models/{GEMINI_MODEL}:generateContent"
)
GEMINI_TIMEOUT_S: int      = 30
MAX_OUTPUT_TOKENS: int     = 2000

# Host shell request endpoint. When set, analysis requests are delegated to
# the host instead of calling Gemini directly.
HOST_URL_ENV: str       = "ADOPTION_HOST_URL"
HOST_ACTION: str        = "generate_response"
HOST_TIMEOUT_S: int     = 60

GEMINI_KEY_ENV: str = "GEMINI_API_KEY"
