"""Spell Prep - prepared-spell tracker for tabletop RPGs.

Browse a fixed spell catalog, filter/sort/search it, mark spells as
prepared, flag prepared spells as "not counted", and keep the selection
under named profiles that persist across sessions.

Example:
    >>> from spell_prep import open_session
    >>>
    >>> session = open_session()
    >>> session.prepare("Bless")
    True
    >>> session.create_profile("Wizard")
    Profile(name='Wizard', prepared=(), ignored=())
    >>> session.view().prepared_count
    0

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic schemas (SpellRecord, Profile, FilterState).
    catalog: Catalog loading and normalization.
    engine: Selection engine and view projection.
    storage: Key-value backends and the profile store.
    session: Wiring of catalog, engine and profile store.
    ui: Streamlit interface.
"""

from __future__ import annotations

# Core
from spell_prep.core.config import Settings, get_settings
from spell_prep.core.exceptions import (
    DuplicateNameError,
    LastProfileError,
    ProfileNotFoundError,
    SpellPrepError,
)
from spell_prep.core.logging import configure_logging, get_logger

# Catalog & models
from spell_prep.catalog import Catalog, level_to_number, load_catalog
from spell_prep.models import FilterState, Profile, SortMethod, SpellRecord

# Engine
from spell_prep.engine import SelectionEngine, SpellView, compute_view

# Storage & session
from spell_prep.storage import InMemoryKeyValueStore, ProfileStore, SQLiteKeyValueStore
from spell_prep.session import SpellPrepSession, open_session


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "SpellPrepError",
    "DuplicateNameError",
    "LastProfileError",
    "ProfileNotFoundError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Catalog & models
    "Catalog",
    "load_catalog",
    "level_to_number",
    "SpellRecord",
    "FilterState",
    "SortMethod",
    "Profile",
    # Engine
    "SelectionEngine",
    "SpellView",
    "compute_view",
    # Storage & session
    "ProfileStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "SpellPrepSession",
    "open_session",
]
