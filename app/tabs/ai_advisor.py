"""
🤖 AI Risk Analysis Tab Renderer
================================
Sends the current cohort parameters and shock to the active analysis
backend (host shell or Gemini) and renders the sectioned answer.
"""
from __future__ import annotations

import streamlit as st

import core.agent as agent
from app.utils import split_analysis_sections


def render(generational: dict, industry: dict, shock: float) -> None:
    """Renders the AI analysis tab content."""
    st.markdown("### 🤖 AI Risk Analysis")
    st.caption(
        "AI-generated narrative based on the current parameters. "
        "Indicative only; verify before acting on it."
    )

    backend = agent.detect_backend()
    api_key = st.session_state.get("gemini_key", "").strip()

    if backend == "direct" and not api_key:
        with st.container(border=True):
            st.markdown("#### 🔑 Add a Gemini API key to enable analysis")
            st.markdown("""
            1. Visit [aistudio.google.com](https://aistudio.google.com)
            2. Click **Get API key** → **Create API key**
            3. Paste it into **Gemini API Key** in the sidebar
            """)
        return

    if st.button("Generate AI Analysis", key="btn_analysis", type="primary"):
        with st.spinner("Analysing scenario..."):
            result = agent.run_analysis(
                generational, industry, shock, api_key=api_key, backend=backend
            )
        st.session_state.analysis_error = result["error"]
        st.session_state.analysis_text = result["answer"] or ""
        if result["detail"]:
            st.caption(result["detail"])

    if st.session_state.analysis_error:
        st.error(st.session_state.analysis_error)
        return

    _render_sections(st.session_state.analysis_text)


def _render_sections(text: str) -> None:
    for section in split_analysis_sections(text):
        st.markdown(f"#### {section['title']}")
        for paragraph in section["paragraphs"]:
            st.markdown(paragraph)
        if section["items"]:
            st.markdown("\n".join(f"- {item}" for item in section["items"]))
