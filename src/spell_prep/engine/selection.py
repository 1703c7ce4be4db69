"""Selection engine: prepared/ignored sets plus filter parameters.

The engine is the only writer of SelectionState. It guarantees that the
ignored set is always a subset of the prepared set: unpreparing a spell
clears its "not counted" flag, and a spell can only be ignored while it
is prepared.

Example:
    >>> engine = SelectionEngine(catalog)
    >>> engine.prepare("Fireball")
    True
    >>> engine.set_ignored("Fireball", True)
    True
    >>> engine.compute_view().prepared_count
    0
    >>> engine.unprepare("Fireball")
    True
    >>> engine.prepared_names, engine.ignored_names
    (frozenset(), frozenset())
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from spell_prep.catalog.loader import Catalog
from spell_prep.core.logging import get_logger
from spell_prep.engine.projector import SpellView, compute_view
from spell_prep.models.selection import FilterState, SelectionState


logger = get_logger(__name__)


class SelectionEngine:
    """Owns the mutable selection state for the active profile.

    Mutators return True when they changed the state and False for no-ops,
    so callers can decide whether a save is needed.
    """

    def __init__(self, catalog: Catalog, *, state: SelectionState | None = None) -> None:
        """Initialize the engine.

        Args:
            catalog: The loaded, immutable spell catalog.
            state: Optional initial state; defaults to an empty selection.
        """
        self._catalog = catalog
        self._state = state or SelectionState()
        self._drop_orphan_ignores()

    # =========================================================================
    # Read Access
    # =========================================================================

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def filter(self) -> FilterState:
        return self._state.filter

    @property
    def prepared_names(self) -> frozenset[str]:
        return self._state.prepared_names

    @property
    def ignored_names(self) -> frozenset[str]:
        return self._state.ignored_names

    @property
    def expanded_names(self) -> frozenset[str]:
        return frozenset(self._state.expanded)

    @property
    def prepared_count(self) -> int:
        return self._state.prepared_count

    def prepared_in_order(self) -> list[str]:
        """Prepared names in the order they were added."""
        return list(self._state.prepared)

    def ignored_in_order(self) -> list[str]:
        """Ignored names in the order they were flagged."""
        return list(self._state.ignored)

    # =========================================================================
    # Filter, Search & Sort
    # =========================================================================

    def set_filter(self, **changes: Any) -> FilterState:
        """Merge the given fields into the filter.

        Values are not checked against the catalog; an unknown class or
        level simply matches nothing. Unknown field names are ignored.

        Returns:
            The updated filter.
        """
        known = FilterState.field_names()
        unknown = sorted(set(changes) - known)
        if unknown:
            logger.warning("Ignoring unknown filter fields", fields=unknown)

        update = {
            key: "" if value is None else str(value)
            for key, value in changes.items()
            if key in known
        }
        if update:
            self._state.filter = self._state.filter.model_copy(update=update)
            logger.debug("Filter updated", **update)
        return self._state.filter

    def set_class_filter(self, class_name: str) -> FilterState:
        return self.set_filter(class_filter=class_name)

    def set_min_level(self, level: str) -> FilterState:
        return self.set_filter(min_level=level)

    def set_max_level(self, level: str) -> FilterState:
        return self.set_filter(max_level=level)

    def set_sort_method(self, sort_method: str) -> FilterState:
        return self.set_filter(sort_method=sort_method)

    def set_search_term(self, term: str) -> FilterState:
        return self.set_filter(search_term=term)

    def reset_filter(self) -> FilterState:
        """Restore the default filter, search and sort."""
        self._state.filter = FilterState()
        return self._state.filter

    # =========================================================================
    # Prepared & Ignored Sets
    # =========================================================================

    def prepare(self, name: str) -> bool:
        """Mark a catalog spell as prepared.

        Returns:
            True if the spell was newly prepared.
        """
        if name in self._state.prepared:
            return False
        if name not in self._catalog:
            logger.warning("Cannot prepare unknown spell", spell=name)
            return False
        self._state.prepared[name] = None
        logger.debug("Spell prepared", spell=name)
        return True

    def unprepare(self, name: str) -> bool:
        """Remove a spell from the prepared set and clear its ignore flag.

        Returns:
            True if the spell was prepared before the call.
        """
        if name not in self._state.prepared:
            return False
        del self._state.prepared[name]
        self._state.ignored.pop(name, None)
        logger.debug("Spell unprepared", spell=name)
        return True

    def toggle_prepared(self, name: str) -> bool:
        """Prepare an unprepared spell or unprepare a prepared one.

        Returns:
            True if the state changed.
        """
        if name in self._state.prepared:
            return self.unprepare(name)
        return self.prepare(name)

    def set_ignored(self, name: str, ignored: bool) -> bool:
        """Flag a prepared spell as not counted, or clear the flag.

        Does nothing for spells that are not prepared.

        Returns:
            True if the ignored set changed.
        """
        if name not in self._state.prepared:
            return False
        if ignored:
            if name in self._state.ignored:
                return False
            self._state.ignored[name] = None
        else:
            if name not in self._state.ignored:
                return False
            del self._state.ignored[name]
        logger.debug("Spell ignore flag set", spell=name, ignored=ignored)
        return True

    def replace_selection(self, prepared: Iterable[str], ignored: Iterable[str]) -> None:
        """Swap in a whole new prepared/ignored selection.

        Filter, search, sort and expansion flags are left untouched.
        Ignored names that are not prepared are dropped.
        """
        self._state.prepared = dict.fromkeys(prepared)
        self._state.ignored = dict.fromkeys(ignored)
        self._drop_orphan_ignores()

    def _drop_orphan_ignores(self) -> None:
        orphans = [name for name in self._state.ignored if name not in self._state.prepared]
        for name in orphans:
            del self._state.ignored[name]
        if orphans:
            logger.warning("Dropped ignore flags for unprepared spells", spells=orphans)

    # =========================================================================
    # UI State
    # =========================================================================

    def toggle_expanded(self, name: str) -> bool:
        """Flip the detail expansion of a card.

        Returns:
            True if the card is now expanded.
        """
        if name in self._state.expanded:
            self._state.expanded.discard(name)
            return False
        self._state.expanded.add(name)
        return True

    # =========================================================================
    # Projection
    # =========================================================================

    def compute_view(self) -> SpellView:
        """Project the catalog through the current state."""
        return compute_view(self._catalog, self._state)


__all__ = ["SelectionEngine"]
