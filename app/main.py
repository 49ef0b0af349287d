# ═══════════════════════════════════════════════════════════════════════════════
# AdoptionRisk Platform — AI Adoption Risk Scenario Modeler
# © 2026 Aparajita Parihar. All rights reserved.
#
# Every rerun re-derives the full output bundle from the current
# (generational, industry, shock) triple held in session state.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations
import logging
import os
import sys

from dotenv import load_dotenv
# Load .env from project root (parent directory of app/)
_env_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env")
load_dotenv(_env_path)

import streamlit as st

# ─────────────────────────────────────────────────────────────────────────────
# PATH SETUP: ensure core and config modules are accessible
# ─────────────────────────────────────────────────────────────────────────────
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

import app.branding as branding
import core.adoption as adoption
from app.session import init_session
from app.sidebar import render_sidebar
from app.tabs import ai_advisor, analytics, dashboard

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def run() -> None:
    branding.configure_page()
    branding.inject_branding()
    init_session()

    generational, industry, shock = render_sidebar()
    branding.render_topbar()

    try:
        bundle = adoption.evaluate(generational, industry, shock)
    except ValueError as exc:
        # ConfigurationError is a ValueError; both invalidate the whole bundle
        logger.error("Scenario evaluation failed: %s", exc)
        st.error(f"Could not evaluate scenario: {exc}")
        return

    tab_dash, tab_analytics, tab_ai = st.tabs([
        "📈 Dashboard", "📊 Risk Analytics", "🤖 AI Analysis",
    ])
    with tab_dash:
        dashboard.render(bundle, generational, industry)
    with tab_analytics:
        analytics.render(bundle)
    with tab_ai:
        ai_advisor.render(generational, industry, shock)


run()
