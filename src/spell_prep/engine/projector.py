"""View projection: catalog + selection state -> renderable spell lists.

Everything in this module is a pure function of its arguments. The renderer
calls ``compute_view`` after every state change and decides for itself how
to update the screen.

Example:
    >>> view = compute_view(catalog, state)
    >>> [spell.name for spell in view.prepared], view.prepared_count
    (['Bless', 'Cure Wounds'], 1)
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from spell_prep.catalog.levels import level_to_number
from spell_prep.core.constants import ALL
from spell_prep.models.enums import SortMethod
from spell_prep.models.selection import FilterState, SelectionState
from spell_prep.models.spell import SpellRecord


SortKey = Callable[[SpellRecord], tuple]


@dataclass(frozen=True)
class SpellView:
    """Derived lists for one render pass.

    Attributes:
        available: Catalog spells passing the class, level and search
            filters, prepared ones included.
        prepared: Every prepared catalog spell, regardless of filters.
        prepared_count: Prepared spells minus those marked not counted.
        prepared_names: Names currently prepared.
        ignored_names: Prepared names marked not counted.
        expanded_names: Cards the user has expanded.
    """

    available: tuple[SpellRecord, ...]
    prepared: tuple[SpellRecord, ...]
    prepared_count: int
    prepared_names: frozenset[str] = field(default_factory=frozenset)
    ignored_names: frozenset[str] = field(default_factory=frozenset)
    expanded_names: frozenset[str] = field(default_factory=frozenset)

    def is_prepared(self, name: str) -> bool:
        return name in self.prepared_names

    def is_ignored(self, name: str) -> bool:
        return name in self.ignored_names

    def is_expanded(self, name: str) -> bool:
        return name in self.expanded_names


# =============================================================================
# Predicates
# =============================================================================


def matches_class(spell: SpellRecord, class_filter: str) -> bool:
    """Keep the spell if no class is selected or the spell lists it."""
    return class_filter == ALL or class_filter in spell.classes


def matches_level_range(spell: SpellRecord, min_level: str, max_level: str) -> bool:
    """Keep the spell if its numeric level lies inside the selected bounds."""
    level = level_to_number(spell.level)
    if min_level != ALL and level < level_to_number(min_level):
        return False
    if max_level != ALL and level > level_to_number(max_level):
        return False
    return True


def matches_search(spell: SpellRecord, search_term: str) -> bool:
    """Case-insensitive substring match over name and description."""
    if not search_term:
        return True
    return search_term.casefold() in spell.search_text


def filter_spells(spells: Iterable[SpellRecord], filters: FilterState) -> list[SpellRecord]:
    """Apply class, level range and search predicates, keeping input order."""
    return [
        spell
        for spell in spells
        if matches_class(spell, filters.class_filter)
        and matches_level_range(spell, filters.min_level, filters.max_level)
        and matches_search(spell, filters.search_term)
    ]


# =============================================================================
# Sorting
# =============================================================================


def name_sort_key(name: str) -> tuple[str, str]:
    """Collation key approximating a locale-aware comparison.

    Accents and case are ignored first; the raw name breaks ties so the
    ordering stays total and deterministic.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name)


def sort_key_for(sort_method: str) -> SortKey | None:
    """Return the sort key for a sort method, or None for catalog order."""
    if sort_method == SortMethod.ALPHA:
        return lambda spell: name_sort_key(spell.name)
    if sort_method == SortMethod.LEVEL:
        return lambda spell: (level_to_number(spell.level), *name_sort_key(spell.name))
    return None


def sort_spells(spells: Iterable[SpellRecord], sort_method: str) -> list[SpellRecord]:
    """Sort spells by the given method; unknown methods keep input order."""
    key = sort_key_for(sort_method)
    if key is None:
        return list(spells)
    return sorted(spells, key=key)


# =============================================================================
# Projection
# =============================================================================


def compute_view(catalog: Iterable[SpellRecord], state: SelectionState) -> SpellView:
    """Project the catalog through the current selection state.

    Args:
        catalog: Spell records in catalog order.
        state: The selection state to project.

    Returns:
        A SpellView with both lists sorted by ``state.filter.sort_method``.
    """
    spells = tuple(catalog)
    filters = state.filter

    available = sort_spells(filter_spells(spells, filters), filters.sort_method)
    prepared = sort_spells(
        (spell for spell in spells if spell.name in state.prepared),
        filters.sort_method,
    )

    return SpellView(
        available=tuple(available),
        prepared=tuple(prepared),
        prepared_count=state.prepared_count,
        prepared_names=state.prepared_names,
        ignored_names=state.ignored_names,
        expanded_names=frozenset(state.expanded),
    )


__all__ = [
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
