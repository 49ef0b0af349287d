"""
Visual branding for the AdoptionRisk app: page configuration and the CSS
used by KPI cards, validation messages and the top bar.
"""

from __future__ import annotations

import streamlit as st

PAGE_TITLE = "AdoptionRisk — AI Adoption Risk Modeler"
PAGE_ICON = "📈"

# ─────────────────────────────────────────────────────────────────────────────
# CSS
# ─────────────────────────────────────────────────────────────────────────────
ADOPTION_CSS = """
<style>
.block-container { padding-top: 1.5rem !important; max-width: 100% !important; }

.platform-topbar {
  background: linear-gradient(135deg, #071A2F 0%, #0D2640 60%, #0A2E40 100%);
  border-bottom: 2px solid #00C2A8;
  padding: 10px 24px;
  margin-bottom: 16px;
  color: #CBD8E6;
}
.platform-topbar h1 { color: #ffffff; font-size: 1.4rem; margin: 0; }
.platform-topbar span { font-size: 0.8rem; color: #8FB3CC; }

.kpi-card {
  background: #ffffff;
  border-radius: 8px;
  padding: 18px 20px 14px;
  border: 1px solid #E0EBF4;
  border-top: 3px solid #00C2A8;
  box-shadow: 0 2px 8px rgba(7,26,47,.05);
  height: 100%;
}
.kpi-card.accent-green { border-top-color:#1DB87A; }
.kpi-card.accent-gold  { border-top-color:#F0B429; }
.kpi-card.accent-teal  { border-top-color:#00C2A8; }
.kpi-label { font-size: 0.78rem; font-weight: 700; letter-spacing: 1px; text-transform: uppercase; color: #3A576B; margin-bottom: 6px; }
.kpi-value { font-size: 2rem; font-weight: 700; color: #071A2F; line-height: 1.1; }
.kpi-sub   { font-size: 0.78rem; color: #5A7A90; margin-top: 2px; }

.val-ok   { border-left: 3px solid #1DB87A; padding: 6px 12px; font-size: 0.8rem; }
.val-warn { border-left: 3px solid #F0B429; padding: 6px 12px; font-size: 0.8rem; }
.val-err  { border-left: 3px solid #E84C4C; padding: 6px 12px; font-size: 0.8rem; }
</style>
"""


def configure_page() -> None:
    """Must be the first Streamlit call of a run."""
    st.set_page_config(
        page_title=PAGE_TITLE,
        page_icon=PAGE_ICON,
        layout="wide",
        initial_sidebar_state="expanded",
    )


def inject_branding() -> None:
    st.markdown(ADOPTION_CSS, unsafe_allow_html=True)


def render_topbar() -> None:
    st.markdown(
        "<div class='platform-topbar'>"
        "<h1>AI Adoption Risk Modeler</h1>"
        "<span>Logistic cohort adoption · HHI concentration · Finance shock cascade</span>"
        "</div>",
        unsafe_allow_html=True,
    )
