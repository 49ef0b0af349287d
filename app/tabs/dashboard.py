"""
Renders the Dashboard tab.

Adoption curves and adoption velocity for both cohort sets, the
Herfindahl-Hirschman concentration series, and the Finance shock cascade.
"""
from __future__ import annotations
import streamlit as st
import plotly.graph_objects as go

from app.utils import series_frame

CHART_LAYOUT = dict(
    plot_bgcolor="rgba(0,0,0,0)",
    paper_bgcolor="rgba(0,0,0,0)",
    font=dict(family="Nunito Sans, sans-serif", size=11),
    margin=dict(t=20, b=10, l=0, r=0),
    height=300,
    yaxis=dict(gridcolor="#E8EEF4", zerolinecolor="#D0DAE4", tickfont=dict(size=10)),
    xaxis=dict(tickfont=dict(size=10), dtick=2),
    legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
)

HHI_COLOURS = {"generational": "#8884d8", "industry": "#0088FE"}


def _line_chart(series: dict, cohorts: dict, y_title: str, y_range: list | None = None) -> go.Figure:
    frame = series_frame(series)
    fig = go.Figure()
    for name in frame.columns:
        fig.add_trace(go.Scatter(
            x=frame.index, y=frame[name], mode="lines", name=name,
            line=dict(color=cohorts.get(name, {}).get("color"), width=2),
        ))
    fig.update_layout(**CHART_LAYOUT)
    fig.update_yaxes(title_text=y_title, range=y_range)
    return fig


def render(bundle: dict, generational: dict, industry: dict) -> None:
    """Renders the dashboard tab content."""
    sets = (("Generational", "generational", generational), ("Industry", "industry", industry))

    st.subheader("Adoption Curves")
    cols = st.columns(2)
    for col, (label, key, cohorts) in zip(cols, sets):
        with col:
            st.markdown(f"**{label}**")
            st.plotly_chart(
                _line_chart(bundle[key]["adoption"], cohorts, "Adoption", [0, 1]),
                use_container_width=True,
            )

    st.subheader("Adoption Velocity")
    cols = st.columns(2)
    for col, (label, key, cohorts) in zip(cols, sets):
        with col:
            st.markdown(f"**{label}**")
            st.plotly_chart(
                _line_chart(bundle[key]["velocity"], cohorts, "Δ adoption / yr"),
                use_container_width=True,
            )

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Concentration Risk (HHI)")
        fig_h = go.Figure()
        for label, key, _ in sets:
            years, values = zip(*bundle[key]["hhi"])
            fig_h.add_trace(go.Scatter(
                x=years, y=values, mode="lines", name=label,
                line=dict(color=HHI_COLOURS[key], width=2),
            ))
        fig_h.update_layout(**CHART_LAYOUT)
        fig_h.update_yaxes(title_text="HHI")
        st.plotly_chart(fig_h, use_container_width=True)

    with c2:
        st.subheader("Finance Shock Cascade")
        cascade = bundle["industry"]["cascade"]
        fig_c = go.Figure(go.Bar(
            x=[row["sector"] for row in cascade],
            y=[row["delta"] for row in cascade],
            marker_color=[industry.get(row["sector"], {}).get("color") for row in cascade],
            text=[f"{row['delta']:+.3f}" for row in cascade],
            textposition="outside",
        ))
        fig_c.update_layout(**{**CHART_LAYOUT, "showlegend": False, "xaxis": dict(tickfont=dict(size=10))})
        fig_c.update_yaxes(title_text="Δ adoption")
        st.plotly_chart(fig_c, use_container_width=True)
