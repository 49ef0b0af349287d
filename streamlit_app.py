"""
# AdoptionRisk Platform

Main entry point for the Streamlit application.

Hands off to the application page in ``app/main.py``, which owns page
configuration, the sidebar controls and the dashboard tabs.
"""

import streamlit as st

st.switch_page("app/main.py")
