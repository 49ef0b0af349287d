"""
Renders the Risk Analytics tab.

Headline KPI cards (peak concentration per set, worst cascade impact) and a
per-cohort table of time-to-threshold, exposure AUC, peak velocity and the
timing intervals around the peak.
"""
from __future__ import annotations
import streamlit as st
import pandas as pd

from config.constants import ADOPTION_THRESHOLD

NOT_REACHED = "Not reached"


def _card(label: str, value: str, subtext: str, accent_class: str = "") -> None:
    st.markdown(
        f'<div class="kpi-card {accent_class}">'
        f'<div class="kpi-label">{label}</div>'
        f'<div class="kpi-value">{value}</div>'
        f'<div class="kpi-sub">{subtext}</div>'
        f"</div>",
        unsafe_allow_html=True,
    )


def cohort_table(analytics: dict, set_key: str) -> pd.DataFrame:
    """One row per cohort of ``set_key`` with every scalar metric."""
    rows = []
    thresholds = analytics["timeToThreshold"][set_key]
    for name, th_year in thresholds.items():
        peak = analytics["peakVelocity"][set_key][name]
        intervals = analytics["intervals"][set_key][name]
        rows.append({
            "Cohort":                  name,
            f"Year ≥ {ADOPTION_THRESHOLD:.0%}": str(th_year) if th_year is not None else NOT_REACHED,
            "AUC (adoption-yrs)":      analytics["auc"][set_key][name],
            "Peak velocity year":      str(peak["year"]) if peak["has_data"] else "—",
            "Peak velocity":           peak["value"],
            "Years t₀ → peak":         intervals["toPeak"],
            "Years peak → threshold":  intervals["peakTo90"],
        })
    return pd.DataFrame(rows).set_index("Cohort")


def render(bundle: dict) -> None:
    """Renders the analytics tab content."""
    analytics = bundle["analytics"]
    gen_peak = analytics["peakConcentration"]["generational"]
    ind_peak = analytics["peakConcentration"]["industry"]
    worst = analytics["worstCascade"]

    k1, k2, k3 = st.columns(3)
    with k1:
        _card("Peak HHI · Generational", f"{gen_peak['value']:.4f}", f"in {gen_peak['year']}")
    with k2:
        _card("Peak HHI · Industry", f"{ind_peak['value']:.4f}", f"in {ind_peak['year']}", "accent-teal")
    with k3:
        _card("Worst Cascade Impact", f"{worst['delta']:+.3f}", worst["sector"], "accent-gold")

    st.markdown("<div style='height:16px;'></div>", unsafe_allow_html=True)

    st.subheader("Generational Cohorts")
    st.dataframe(cohort_table(analytics, "generational"), use_container_width=True)

    st.subheader("Industry Cohorts")
    st.dataframe(cohort_table(analytics, "industry"), use_container_width=True)

    st.caption(
        "Where the threshold is not reached within the horizon, the peak velocity "
        "year stands in for it and 'Years peak → threshold' reads 0."
    )
