from __future__ import annotations

import html

import streamlit as st


def render_header(app_name: str, subtitle: str, right_pill: str, persistent: bool = False) -> None:
    dot_cls = "dot persistent" if persistent else "dot"
    st.markdown(
        f"""
<div class="app-header">
  <div>
    <div class="app-title">{html.escape(app_name)}</div>
    <div class="app-subtitle">{html.escape(subtitle)}</div>
  </div>
  <div class="pill"><span class="{dot_cls}"></span>{html.escape(right_pill)}</div>
</div>
        """,
        unsafe_allow_html=True,
    )
