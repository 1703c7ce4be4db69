"""Plain-text formatting for spell cards.

These helpers contain no Streamlit calls, so the card layout can be
tested without a running app.
"""

from __future__ import annotations

from spell_prep.core.constants import AVAILABLE_PREVIEW_LENGTH
from spell_prep.models.spell import SpellRecord


META_SEPARATOR = " • "
ELLIPSIS = "..."


def capitalize(text: str) -> str:
    """Uppercase the first character and leave the rest alone.

    Example:
        >>> capitalize("cantrip")
        'Cantrip'
        >>> capitalize("3rd-level")
        '3rd-level'
    """
    return text[:1].upper() + text[1:]


def description_preview(text: str | None, limit: int = AVAILABLE_PREVIEW_LENGTH) -> str:
    """Truncate a description to ``limit`` characters, adding "..." if cut."""
    text = text or ""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def card_meta(spell: SpellRecord) -> str:
    """Summary line under the card title: level, type and classes."""
    parts = [capitalize(spell.level)]
    if spell.type:
        parts.append(spell.type)
    if spell.classes:
        parts.append(", ".join(spell.classes))
    return META_SEPARATOR.join(parts)


def card_details(spell: SpellRecord) -> list[tuple[str, str]]:
    """Label/value rows for an expanded card, in display order."""
    return [
        ("Name", spell.name),
        ("Level", capitalize(spell.level)),
        ("School", spell.school_name),
        ("Ritual", "Yes" if spell.is_ritual else "No"),
        ("Class", ", ".join(spell.classes)),
        ("Actions", spell.casting_time or ""),
        ("Attack/Save", spell.attack_save or ""),
        ("Damage/Effect", spell.damage_effect or ""),
        ("Description", spell.description),
    ]


def counter_label(count: int) -> str:
    return f"Prepared: {count}"


__all__ = [
    "capitalize",
    "card_details",
    "card_meta",
    "counter_label",
    "description_preview",
]
