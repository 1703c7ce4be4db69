"""Pydantic V2 schemas and runtime state for Spell Prep.

Submodules:
    enums: SortMethod and StoreState.
    spell: SpellRecord, the normalized catalog entry.
    selection: FilterState and SelectionState.
    profile: Profile, the persisted selection snapshot.
"""

from __future__ import annotations

from spell_prep.models.enums import SortMethod, StoreState
from spell_prep.models.profile import Profile, normalize_profile_name
from spell_prep.models.selection import FilterState, SelectionState
from spell_prep.models.spell import FIELD_SYNONYMS, SpellRecord


__all__ = [
    "SortMethod",
    "StoreState",
    "SpellRecord",
    "FIELD_SYNONYMS",
    "FilterState",
    "SelectionState",
    "Profile",
    "normalize_profile_name",
]
