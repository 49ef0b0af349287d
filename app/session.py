# ═══════════════════════════════════════════════════════════════════════════════
# AdoptionRisk Platform — Session State Management
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single responsibility: own the complete st.session_state initialisation
# contract for the entire application.
#
# Rules:
#   • init_session() is idempotent; call it every run(), it never overwrites
#     existing values (uses setdefault exclusively).
#   • No module outside this file may write a NEW top-level session key
#     without first registering it here.
#   • _get_secret() is the sole secrets access point for the application.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import os

import streamlit as st

from config.constants import DEFAULT_SHOCK, GEMINI_KEY_ENV
from config.scenarios import default_cohorts


# ─────────────────────────────────────────────────────────────────────────────
# SECRETS ACCESS POINT
# ─────────────────────────────────────────────────────────────────────────────

def _get_secret(key: str, default: str = "") -> str:
    """Read a secret from Streamlit Secrets, falling back to environment variable.

    Priority: st.secrets[key]  →  os.getenv(key, default)

    Never raises; returns ``default`` if the key is absent from both sources.
    """
    try:
        return st.secrets[key]
    except (KeyError, AttributeError, FileNotFoundError):
        return os.getenv(key, default)


# ─────────────────────────────────────────────────────────────────────────────
# SESSION STATE INITIALISATION
# ─────────────────────────────────────────────────────────────────────────────

def init_session() -> None:
    """Idempotently initialise all application session state keys.

    Session key registry (authoritative):

    Scenario parameters
    ───────────────────
    generational        dict[str, dict]  Generational cohort set
    industry            dict[str, dict]  Industry sector cohort set
    shock               float            Finance shock scalar

    AI analysis
    ───────────
    analysis_text       str              Last analysis returned by a backend
    analysis_error      str | None       User-facing failure message
    gemini_key          str              Gemini API key (direct backend only)
    gemini_key_valid    bool             True once the key has been validated
    """
    ss = st.session_state
    generational, industry = default_cohorts()

    ss.setdefault("generational", generational)
    ss.setdefault("industry",     industry)
    ss.setdefault("shock",        DEFAULT_SHOCK)

    ss.setdefault("analysis_text",    "")
    ss.setdefault("analysis_error",   None)
    ss.setdefault("gemini_key",       _get_secret(GEMINI_KEY_ENV, ""))
    ss.setdefault("gemini_key_valid", False)


# Prefix for parameter widget keys, so a reset can drop their stale state
WIDGET_PREFIX: str = "param__"


def reset_parameters() -> None:
    """Restore both cohort sets and the shock to their defaults."""
    for key in [k for k in st.session_state.keys() if str(k).startswith(WIDGET_PREFIX)]:
        del st.session_state[key]
    generational, industry = default_cohorts()
    st.session_state["generational"] = generational
    st.session_state["industry"] = industry
    st.session_state["shock"] = DEFAULT_SHOCK
    st.session_state["analysis_text"] = ""
    st.session_state["analysis_error"] = None
