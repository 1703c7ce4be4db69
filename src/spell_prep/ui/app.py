"""Spell Prep - Streamlit entry point.

Run with::

    streamlit run src/spell_prep/ui/app.py

The page is a thin renderer: it reads ``SpellPrepSession.view()`` and
forwards widget events to the session. All rules live in the engine.
"""

from __future__ import annotations

from html import escape

import streamlit as st

from spell_prep.core.config import get_settings
from spell_prep.core.constants import ALL
from spell_prep.core.exceptions import ProfileError, StorageError
from spell_prep.core.logging import configure_logging, get_logger
from spell_prep.models.enums import SortMethod
from spell_prep.models.spell import SpellRecord
from spell_prep.session import SpellPrepSession, open_session
from spell_prep.ui.formatting import (
    card_details,
    card_meta,
    counter_label,
    description_preview,
)
from spell_prep.ui.theme import apply_theme

logger = get_logger(__name__)
settings = get_settings()


# =============================================================================
# Page Configuration
# =============================================================================


st.set_page_config(
    page_title=settings.ui.page_title,
    page_icon="📜",
    layout="wide",
    initial_sidebar_state="expanded",
)

apply_theme()


# =============================================================================
# Session State
# =============================================================================


def init_session_state() -> None:
    """Open the spell session once per browser session."""
    if "spell_session" not in st.session_state:
        configure_logging(level=settings.log_level, json_format=settings.json_logs)
        st.session_state.spell_session = open_session(settings)
    if "profile_message" not in st.session_state:
        st.session_state.profile_message = None


def get_session() -> SpellPrepSession:
    init_session_state()
    return st.session_state.spell_session


# =============================================================================
# Sidebar: Profiles & Filters
# =============================================================================


def render_profiles(session: SpellPrepSession) -> None:
    """Render the profile selector and create/delete controls."""
    st.markdown("### 🗂️ Profile")

    if st.session_state.profile_message:
        st.warning(st.session_state.profile_message)
        st.session_state.profile_message = None

    names = session.profile_names
    active = session.active_profile_name
    selected = st.selectbox(
        "Active profile",
        options=names,
        index=names.index(active) if active in names else 0,
    )
    if selected != active:
        try:
            session.switch_profile(selected)
        except (ProfileError, StorageError) as exc:
            st.session_state.profile_message = exc.message
        st.rerun()

    new_name = st.text_input("New profile name", key="new_profile_name")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Create", use_container_width=True):
            try:
                session.create_profile(new_name)
            except (ProfileError, StorageError) as exc:
                st.session_state.profile_message = exc.message
            st.rerun()
    with col2:
        if st.button("Delete", use_container_width=True, disabled=len(names) < 2):
            try:
                session.delete_profile(active or "")
            except (ProfileError, StorageError) as exc:
                st.session_state.profile_message = exc.message
            st.rerun()


def render_filters(session: SpellPrepSession) -> None:
    """Render class, level range, search and sort controls."""
    st.markdown("### 🔎 Filters")
    catalog = session.catalog
    current = session.engine.filter

    class_options = [ALL, *catalog.class_options()]
    level_options = [ALL, *catalog.level_options()]
    sort_options = list(SortMethod)

    session.set_class_filter(
        st.selectbox(
            "Class",
            options=class_options,
            index=_index_or_zero(class_options, current.class_filter),
            format_func=lambda value: "All classes" if value == ALL else value,
        )
    )
    session.set_min_level(
        st.selectbox(
            "Min level",
            options=level_options,
            index=_index_or_zero(level_options, current.min_level),
        )
    )
    session.set_max_level(
        st.selectbox(
            "Max level",
            options=level_options,
            index=_index_or_zero(level_options, current.max_level),
        )
    )
    session.set_search_term(st.text_input("Search", value=current.search_term))
    sort_method = st.selectbox(
        "Sort",
        options=sort_options,
        index=_index_or_zero(sort_options, current.sort_method),
        format_func=lambda method: method.display_name,
    )
    session.set_sort_method(sort_method.value)

    if st.button("Reset filters", use_container_width=True):
        session.reset_filter()
        st.rerun()


def _index_or_zero(options: list, value: str) -> int:
    return options.index(value) if value in options else 0


# =============================================================================
# Spell Columns
# =============================================================================


def _sync_checkbox(key: str, value: bool) -> None:
    """Overwrite a keyed checkbox with the engine's state before it renders."""
    st.session_state[key] = value


def _on_prepared_change(session: SpellPrepSession, name: str, key: str) -> None:
    if st.session_state[key]:
        session.prepare(name)
    else:
        session.unprepare(name)


def _on_ignored_change(session: SpellPrepSession, name: str, key: str) -> None:
    session.set_ignored(name, bool(st.session_state[key]))


def render_prepared_column(session: SpellPrepSession) -> None:
    """Render prepared spells with unprepare and "Not counted" toggles."""
    view = session.view()
    st.markdown(
        f'<div class="prepared-counter">{counter_label(view.prepared_count)}</div>',
        unsafe_allow_html=True,
    )

    if not view.prepared:
        st.info("No spells prepared yet. Tick a spell on the right to prepare it.")
        return

    for spell in view.prepared:
        prepared_key = f"prepared_{spell.name}"
        ignored_key = f"ignored_{spell.name}"
        _sync_checkbox(prepared_key, True)
        _sync_checkbox(ignored_key, view.is_ignored(spell.name))

        col1, col2 = st.columns([3, 2])
        with col1:
            st.checkbox(
                spell.name,
                key=prepared_key,
                on_change=_on_prepared_change,
                args=(session, spell.name, prepared_key),
            )
        with col2:
            st.checkbox(
                "Not counted",
                key=ignored_key,
                on_change=_on_ignored_change,
                args=(session, spell.name, ignored_key),
            )
        preview = description_preview(spell.description, settings.ui.prepared_preview_length)
        st.caption(preview)


def render_available_column(session: SpellPrepSession) -> None:
    """Render the filtered catalog with prepare checkboxes and details."""
    view = session.view()
    st.markdown(f"### 📖 Available ({len(view.available)})")

    if not view.available:
        st.info("No spells match the current filters.")
        return

    for spell in view.available:
        prepared = view.is_prepared(spell.name)
        available_key = f"available_{spell.name}"
        _sync_checkbox(available_key, prepared)

        render_spell_card(spell, prepared=prepared)
        col1, col2 = st.columns([3, 1])
        with col1:
            st.checkbox(
                "Prepared",
                key=available_key,
                on_change=_on_prepared_change,
                args=(session, spell.name, available_key),
            )
        with col2:
            expanded = view.is_expanded(spell.name)
            st.button(
                "−" if expanded else "+",
                key=f"expand_{spell.name}",
                help="Collapse" if expanded else "Expand",
                on_click=session.toggle_expanded,
                args=(spell.name,),
            )
        if view.is_expanded(spell.name):
            render_spell_details(spell)


def render_spell_card(spell: SpellRecord, *, prepared: bool) -> None:
    css_class = "spell-card selected" if prepared else "spell-card"
    preview = description_preview(spell.description, settings.ui.available_preview_length)
    st.markdown(
        f"""
        <div class="{css_class}">
            <strong>{escape(spell.name)}</strong>
            <div class="card-meta">{escape(card_meta(spell))}</div>
            <div class="desc">{escape(preview)}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_spell_details(spell: SpellRecord) -> None:
    for label, value in card_details(spell):
        st.markdown(f"**{label}:** {value}")


# =============================================================================
# Main Page
# =============================================================================


def main() -> None:
    """Render the spell preparation page."""
    session = get_session()

    with st.sidebar:
        render_profiles(session)
        st.divider()
        render_filters(session)

    if session.last_save_error is not None:
        st.error(f"Could not save your selection: {session.last_save_error.message}")

    st.title("📜 Spell Prep")
    col1, col2 = st.columns([1, 2])
    with col1:
        render_prepared_column(session)
    with col2:
        render_available_column(session)


# =============================================================================
# Entry Point
# =============================================================================


main()
