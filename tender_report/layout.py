from typing import Tuple

import streamlit as st

from .config import DEFAULT_TEMPLATE, DEFAULT_THEME, FILTER_SECTIONS
from .context import FilterSelection
from .report_presets import SECTION_TEMPLATES, THEMES


def render_section_picker(key: str = "sections") -> FilterSelection:
    """
    Checkbox list of the optional report sections, all ticked by default.
    Labels come from the shared enumeration so the UI and engine agree.
    """
    st.markdown("**Sections to include**")
    chosen = []
    left, right = st.columns(2)
    for index, (sid, label) in enumerate(FILTER_SECTIONS.items()):
        column = left if index % 2 == 0 else right
        with column:
            if st.checkbox(label, value=True, key=f"{key}-{sid}"):
                chosen.append(sid)
    return FilterSelection.of(chosen)


def render_style_picker() -> Tuple[str, str]:
    """Theme and section-order selectors; returns (theme, template) names."""
    themes = list(THEMES)
    templates = list(SECTION_TEMPLATES)
    theme = st.selectbox(
        "Theme",
        themes,
        index=themes.index(DEFAULT_THEME) if DEFAULT_THEME in themes else 0,
        format_func=lambda name: THEMES[name].label,
    )
    template = st.selectbox(
        "Section order",
        templates,
        index=templates.index(DEFAULT_TEMPLATE) if DEFAULT_TEMPLATE in templates else 0,
        format_func=lambda name: SECTION_TEMPLATES[name].label,
    )
    return theme, template
