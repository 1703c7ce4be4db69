"""Spell record model.

Raw spell data arrives with inconsistently named optional fields
(``attack_roll`` vs ``save`` vs ``attack/save`` and so on). SpellRecord
folds every accepted synonym onto one canonical field at validation time,
so the rest of the application only ever sees a single consistent shape.

Example:
    >>> spell = SpellRecord.model_validate({
    ...     "name": "Fireball",
    ...     "level": 3,
    ...     "classes": "Sorcerer, Wizard",
    ...     "attack/save": "DEX Save",
    ... })
    >>> spell.level, spell.classes, spell.attack_save
    ('3', ('Sorcerer', 'Wizard'), 'DEX Save')
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Canonical field -> raw synonyms, checked in order when the canonical
# field is missing or blank.
FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "casting_time": ("actions",),
    "attack_save": ("attack_roll", "save", "attack/save"),
    "damage_effect": ("damage", "damage/effect"),
}

_TRUTHY_STRINGS = frozenset({"1", "true", "yes", "y", "on"})
_RITUAL_PATTERN = re.compile(r"ritual", re.IGNORECASE)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class SpellRecord(BaseModel):
    """An immutable spell entry from the catalog.

    Only ``name``, ``level``, ``classes`` and ``description`` take part in
    filtering, sorting and selection. The remaining fields are metadata
    for the renderer.

    Attributes:
        name: Unique, case-sensitive key used for all set membership.
        level: Level label such as "3", "3rd-level" or "Cantrip".
        classes: Classes that can prepare the spell.
        description: Rules text; empty when the source has none.
        type: Free-form type line, e.g. "Evocation cantrip".
        school: School of magic.
        ritual: Whether the spell can be cast as a ritual.
        casting_time: Casting time or action cost.
        attack_save: Attack roll or saving throw.
        damage_effect: Damage dealt or effect applied.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1, description="Unique spell name")
    level: str = Field(default="", description="Level label")
    classes: tuple[str, ...] = Field(default=(), description="Classes with access")
    description: str = Field(default="", description="Rules text")

    type: str | None = Field(default=None, description="Type line")
    school: str | None = Field(default=None, description="School of magic")
    ritual: bool = Field(default=False, description="Castable as a ritual")
    casting_time: str | None = Field(default=None, description="Casting time")
    attack_save: str | None = Field(default=None, description="Attack roll or save")
    damage_effect: str | None = Field(default=None, description="Damage or effect")

    @model_validator(mode="before")
    @classmethod
    def fold_synonyms(cls, data: Any) -> Any:
        """Map synonymous raw keys onto their canonical field names."""
        if not isinstance(data, Mapping):
            return data
        normalized = dict(data)
        for canonical, synonyms in FIELD_SYNONYMS.items():
            if not _is_blank(normalized.get(canonical)):
                continue
            for synonym in synonyms:
                value = normalized.get(synonym)
                if not _is_blank(value):
                    normalized[canonical] = value
                    break
        return normalized

    @field_validator("level", mode="before")
    @classmethod
    def coerce_level(cls, value: Any) -> str:
        """Accept numeric levels and missing values."""
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("classes", mode="before")
    @classmethod
    def coerce_classes(cls, value: Any) -> tuple[str, ...]:
        """Accept a list of classes or a comma-separated string."""
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        return tuple(str(item).strip() for item in value if str(item).strip())

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("ritual", mode="before")
    @classmethod
    def coerce_ritual(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY_STRINGS
        return bool(value)

    @field_validator(
        "type", "school", "casting_time", "attack_save", "damage_effect", mode="before"
    )
    @classmethod
    def coerce_optional_text(cls, value: Any) -> str | None:
        if _is_blank(value):
            return None
        return str(value).strip()

    @property
    def school_name(self) -> str:
        """School of magic, falling back to the first word of the type line."""
        if self.school:
            return self.school
        if self.type:
            return self.type.split(" ")[0]
        return ""

    @property
    def is_ritual(self) -> bool:
        """Whether the spell is a ritual, by flag or by its type line."""
        return self.ritual or bool(_RITUAL_PATTERN.search(self.type or ""))

    @property
    def search_text(self) -> str:
        """Case-folded haystack used by the search filter."""
        return f"{self.name} {self.description}".casefold()


__all__ = [
    "FIELD_SYNONYMS",
    "SpellRecord",
]
