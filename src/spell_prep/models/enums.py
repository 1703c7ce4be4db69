"""Enumeration types for Spell Prep."""

from __future__ import annotations

from enum import StrEnum


class SortMethod(StrEnum):
    """Ordering applied to the available and prepared spell views.

    Any other value is accepted by the engine and keeps catalog order.
    """

    NONE = "none"
    ALPHA = "alpha"
    LEVEL = "level"

    @property
    def display_name(self) -> str:
        """Get a human-readable label for selection widgets."""
        labels = {
            SortMethod.NONE: "Catalog order",
            SortMethod.ALPHA: "Name (A-Z)",
            SortMethod.LEVEL: "Level, then name",
        }
        return labels[self]


class StoreState(StrEnum):
    """Lifecycle of the profile store.

    Levels:
        UNINITIALIZED: Nothing has been read from storage yet.
        LOADED: Profiles are in memory but none is active.
        ACTIVE: A profile is active and drives the selection engine.
    """

    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    ACTIVE = "active"
