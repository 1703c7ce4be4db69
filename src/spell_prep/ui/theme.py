"""Spell Prep theme: card styling for the Streamlit page."""

from __future__ import annotations

import streamlit as st


# =============================================================================
# Color Palette
# =============================================================================


class Colors:
    """Parchment-on-dark palette."""

    AMBER = "#C9A227"

    BG_CARD = "#2A201A"

    TEXT_PRIMARY = "#F5EDE4"
    TEXT_SECONDARY = "#C4B5A5"
    TEXT_MUTED = "#8B7355"

    BORDER = "#5C4A3A"


THEME_CSS = f"""
<style>
    .spell-card {{
        background: {Colors.BG_CARD};
        border: 1px solid {Colors.BORDER};
        border-radius: 8px;
        padding: 0.6rem 0.8rem;
        margin-bottom: 0.5rem;
        color: {Colors.TEXT_PRIMARY};
    }}
    .spell-card.selected {{
        border: 2px solid {Colors.AMBER};
    }}
    .spell-card .card-meta {{
        color: {Colors.TEXT_SECONDARY};
        font-size: 0.85em;
    }}
    .spell-card .desc {{
        color: {Colors.TEXT_MUTED};
        font-size: 0.85em;
    }}
    .prepared-counter {{
        color: {Colors.AMBER};
        font-weight: 600;
        font-size: 1.2em;
    }}
</style>
"""


def apply_theme() -> None:
    """Inject the card CSS into the current page."""
    st.markdown(THEME_CSS, unsafe_allow_html=True)
