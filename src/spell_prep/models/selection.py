"""Filter parameters and mutable selection state."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from spell_prep.core.constants import ALL
from spell_prep.models.enums import SortMethod


class FilterState(BaseModel):
    """Filter, search and sort parameters for the available view.

    Values are deliberately not checked against the catalog: a class or
    level that does not exist simply matches nothing.

    Attributes:
        class_filter: Class name, or "all".
        min_level: Lowest level label to show, or "all".
        max_level: Highest level label to show, or "all".
        search_term: Case-insensitive substring over name and description.
        sort_method: One of SortMethod's values; anything else keeps catalog order.
    """

    model_config = ConfigDict(frozen=True)

    class_filter: str = Field(default=ALL)
    min_level: str = Field(default=ALL)
    max_level: str = Field(default=ALL)
    search_term: str = Field(default="")
    sort_method: str = Field(default=SortMethod.NONE.value)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names accepted by ``SelectionEngine.set_filter``."""
        return frozenset(cls.model_fields)


@dataclass
class SelectionState:
    """Mutable runtime state for one active profile.

    ``prepared`` and ``ignored`` are dicts used as insertion-ordered sets.
    Only the selection engine mutates them.
    """

    prepared: dict[str, None] = field(default_factory=dict)
    ignored: dict[str, None] = field(default_factory=dict)
    filter: FilterState = field(default_factory=FilterState)
    expanded: set[str] = field(default_factory=set)

    @property
    def prepared_names(self) -> frozenset[str]:
        return frozenset(self.prepared)

    @property
    def ignored_names(self) -> frozenset[str]:
        return frozenset(self.ignored)

    @property
    def prepared_count(self) -> int:
        """Prepared spells that count against the preparation limit."""
        return sum(1 for name in self.prepared if name not in self.ignored)


__all__ = [
    "FilterState",
    "SelectionState",
]
