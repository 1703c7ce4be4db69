"""Selection engine and view projection.

Submodules:
    selection: SelectionEngine, the owner of prepared/ignored/filter state.
    projector: compute_view and the SpellView it returns.

Example:
    >>> from spell_prep.catalog import load_catalog
    >>> from spell_prep.engine import SelectionEngine
    >>> engine = SelectionEngine(load_catalog())
    >>> _ = engine.set_sort_method("level")
    >>> engine.compute_view().available[0].level
    'cantrip'
"""

from __future__ import annotations

from spell_prep.engine.projector import (
    SpellView,
    compute_view,
    filter_spells,
    matches_class,
    matches_level_range,
    matches_search,
    name_sort_key,
    sort_key_for,
    sort_spells,
)
from spell_prep.engine.selection import SelectionEngine


__all__ = [
    "SelectionEngine",
    "SpellView",
    "compute_view",
    "filter_spells",
    "matches_class",
    "matches_level_range",
    "matches_search",
    "name_sort_key",
    "sort_key_for",
    "sort_spells",
]
