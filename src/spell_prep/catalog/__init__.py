"""Spell catalog: the static, read-only collection of spell records."""

from __future__ import annotations

from spell_prep.catalog.levels import level_to_number
from spell_prep.catalog.loader import Catalog, load_catalog


__all__ = [
    "Catalog",
    "level_to_number",
    "load_catalog",
]
