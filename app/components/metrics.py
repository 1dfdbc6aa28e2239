from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from config import THEME


# Bars keep the same color for a status across reruns; unknown statuses use the neutral grey
STATUS_COLORS = {
    "open": THEME["accent_primary"],
    "in progress": THEME["warning"],
    "done": THEME["success"],
}
OTHER_STATUS_COLOR = "#6B7280"


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    help: Optional[str] = None


def render_kpi_row(kpis: list[Kpi]) -> None:
    for col, kpi in zip(st.columns(len(kpis)), kpis):
        tooltip = f' title="{html.escape(kpi.help)}"' if kpi.help else ""
        col.markdown(
            f'<div class="metric-card"{tooltip}>'
            f'<div class="metric-label">{html.escape(kpi.label)}</div>'
            f'<div class="metric-value">{html.escape(kpi.value)}</div>'
            "</div>",
            unsafe_allow_html=True,
        )


def status_color_map(statuses: list[str]) -> dict[str, str]:
    return {s: STATUS_COLORS.get(s, OTHER_STATUS_COLOR) for s in statuses}


def style_count_chart(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    """White card surface, no legend (bars are labelled on the x axis), integer counts."""
    axis = dict(gridcolor=THEME["grid"], linecolor=THEME["border_color"])
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(color=THEME["text_primary"]),
        title_font=dict(color=THEME["navy_900"], size=16),
        paper_bgcolor=THEME["bg_card"],
        plot_bgcolor=THEME["bg_card"],
        showlegend=False,
    )
    fig.update_xaxes(title_text=x_title, **axis)
    fig.update_yaxes(title_text=y_title, rangemode="tozero", dtick=1, **axis)
    return fig


def bar_chart(df: pd.DataFrame, x: str, y: str, title: str = "") -> go.Figure:
    fig = px.bar(
        df,
        x=x,
        y=y,
        color=x,
        color_discrete_map=status_color_map(df[x].tolist()),
        title=title,
    )
    fig = style_count_chart(fig, x_title=x, y_title=y)
    st.plotly_chart(fig, use_container_width=True)
    return fig
