from __future__ import annotations

import streamlit as st

from config import THEME


APP_TITLE = "ToDo Manager (Demo)"


def _card(padding: str = "12px 14px") -> dict[str, str]:
    return {
        "background": THEME["bg_card"],
        "border": f"1px solid {THEME['border_color']}",
        "border-radius": f"{int(THEME['radius_px'])}px",
        "box-shadow": THEME["shadow"],
        "padding": padding,
    }


# One entry per class the header, metric cards, narrative blocks and edit panel emit
RULES: dict[str, dict[str, str]] = {
    "[data-testid='stAppViewContainer']": {"background": THEME["bg_primary"]},
    ".app-header": {
        **_card("10px 14px"),
        "display": "flex",
        "align-items": "center",
        "justify-content": "space-between",
        "margin-bottom": "14px",
    },
    ".app-title": {"font-size": "20px", "font-weight": "700", "color": THEME["navy_900"]},
    ".app-subtitle": {"font-size": "14px", "color": THEME["text_secondary"]},
    ".pill": {
        "display": "inline-flex",
        "align-items": "center",
        "gap": "6px",
        "border": f"1px solid {THEME['border_color']}",
        "border-radius": "999px",
        "padding": "6px 10px",
        "font-size": "13px",
        "font-weight": "600",
        "color": THEME["navy_800"],
    },
    ".pill .dot": {
        "width": "8px",
        "height": "8px",
        "border-radius": "999px",
        "background": THEME["accent_primary"],
    },
    ".pill .dot.persistent": {"background": THEME["success"]},
    ".metric-card": _card(),
    ".metric-label": {"font-size": "14px", "color": THEME["text_secondary"]},
    ".metric-value": {"font-size": "24px", "font-weight": "700", "color": THEME["text_primary"]},
    ".tab-intro": {**_card("14px"), "margin-bottom": "14px"},
    ".tab-intro-question": {"font-size": "18px", "font-weight": "700", "color": THEME["navy_900"]},
    ".tab-intro-context": {"font-size": "14px", "color": THEME["text_secondary"]},
    ".callout": {**_card(), "border-left": f"4px solid {THEME['navy_800']}", "margin": "10px 0"},
    ".callout-title": {"font-size": "14px", "font-weight": "700", "color": THEME["navy_900"]},
    ".callout-body": {"font-size": "14px", "color": THEME["text_secondary"]},
    ".edit-panel-title": {"font-size": "16px", "font-weight": "700", "color": THEME["navy_900"], "margin": "4px 0 8px 0"},
}


def stylesheet() -> str:
    blocks = []
    for selector, decls in RULES.items():
        body = " ".join(f"{prop}: {value};" for prop, value in decls.items())
        blocks.append(f"{selector} {{ {body} }}")
    return "\n".join(blocks)


def apply_theme() -> None:
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="✅",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    st.markdown(f"<style>\n{stylesheet()}\n</style>", unsafe_allow_html=True)
