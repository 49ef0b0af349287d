"""Sidebar renderer: cohort parameter sliders, shock control and API key entry."""
from __future__ import annotations

import logging

import streamlit as st

import core.agent as agent_service
from app.session import WIDGET_PREFIX, reset_parameters
from app.utils import validate_gemini_key
from config.constants import T0_RANGE, K_RANGE, W_RANGE, SHOCK_RANGE

logger = logging.getLogger(__name__)


def render_sidebar() -> tuple[dict, dict, float]:
    """
    Renders the full sidebar and returns the current parameter triple.
    Returns: (generational, industry, shock)
    """
    with st.sidebar:
        st.title("AI Risk Controls")

        st.header("Generational Cohorts")
        generational = _render_cohort_controls("generational")

        st.markdown("---")
        st.header("Industry Cohorts")
        industry = _render_cohort_controls("industry")

        st.markdown("---")
        st.header("Shock Scenario")
        lo, hi, step = SHOCK_RANGE
        shock = st.slider(
            "Finance Shock",
            min_value=lo, max_value=hi, step=step,
            value=float(st.session_state.shock),
            key=f"{WIDGET_PREFIX}shock",
        )
        st.session_state.shock = shock

        st.markdown("---")
        if st.button("Reset to defaults", key="btn_reset", use_container_width=True):
            reset_parameters()
            logger.info("Scenario parameters reset to defaults")
            st.rerun()

        st.markdown("---")
        _render_api_key()

    return generational, industry, shock


def _render_cohort_controls(set_key: str) -> dict:
    """Sliders for every cohort in ``st.session_state[set_key]``; writes edits back."""
    cohorts = st.session_state[set_key]
    updated = {}
    t0_lo, t0_hi, t0_step = T0_RANGE
    k_lo, k_hi, k_step = K_RANGE
    w_lo, w_hi, w_step = W_RANGE

    for name, params in cohorts.items():
        st.subheader(name)
        prefix = f"{WIDGET_PREFIX}{set_key}__{name}__"
        t0 = st.slider(
            "Midpoint (t₀)", min_value=t0_lo, max_value=t0_hi, step=t0_step,
            value=int(params["t0"]), key=prefix + "t0",
        )
        k = st.slider(
            "Steepness (k)", min_value=k_lo, max_value=k_hi, step=k_step,
            value=float(params["k"]), key=prefix + "k",
        )
        w = st.slider(
            "Weight (w)", min_value=w_lo, max_value=w_hi, step=w_step,
            value=float(params["w"]), key=prefix + "w",
        )
        updated[name] = {**params, "t0": t0, "k": k, "w": w}

    st.session_state[set_key] = updated
    return updated


def _render_api_key() -> None:
    """Gemini key entry. Hidden when analysis is delegated to a host shell."""
    if agent_service.detect_backend() == "host":
        st.caption("AI analysis is delegated to the host application.")
        return

    st.subheader("Gemini API Key")
    key = st.text_input(
        "API key",
        value=st.session_state.gemini_key,
        type="password",
        key="gemini_key_input",
        label_visibility="collapsed",
    )
    if key != st.session_state.gemini_key:
        st.session_state.gemini_key = key.strip()
        st.session_state.gemini_key_valid = False

    if st.session_state.gemini_key and not st.session_state.gemini_key_valid:
        if st.button("Validate key", key="btn_validate_key", use_container_width=True):
            valid, message, warn = validate_gemini_key(st.session_state.gemini_key)
            st.session_state.gemini_key_valid = valid and not warn
            st.markdown(message, unsafe_allow_html=True)
