from __future__ import annotations

import html

import streamlit as st


def render_tab_intro(question: str, context: str | None = None) -> None:
    """
    Short framing block at the top of each view:
    - what the page is for
    - optional 1–2 line context
    """
    st.markdown(
        f"""
<div class="tab-intro">
  <div class="tab-intro-question">{html.escape(question)}</div>
  {f'<div class="tab-intro-context">{html.escape(context)}</div>' if context else ''}
</div>
        """,
        unsafe_allow_html=True,
    )


def render_callout(title: str, body: str) -> None:
    st.markdown(
        f"""
<div class="callout">
  <div class="callout-title">{html.escape(title)}</div>
  <div class="callout-body">{html.escape(body)}</div>
</div>
        """,
        unsafe_allow_html=True,
    )
