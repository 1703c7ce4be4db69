"""Level label parsing shared by filtering, sorting and the catalog."""

from __future__ import annotations

import re

from spell_prep.core.constants import CANTRIP_LEVEL, UNKNOWN_LEVEL


_NUMBER_PATTERN = re.compile(r"\d+")
_CANTRIP_PATTERN = re.compile(r"cantrip", re.IGNORECASE)


def level_to_number(level: str | int | None) -> int:
    """Convert a level label to a sortable number.

    The first embedded integer wins. Labels without a number map to 0 when
    they mention a cantrip, and to 100 otherwise so they sort last.

    Args:
        level: Level label such as "3", "3rd-level" or "Cantrip".

    Returns:
        The numeric level.

    Example:
        >>> level_to_number("2nd-level")
        2
        >>> level_to_number("Cantrip")
        0
        >>> level_to_number("Mythic")
        100
    """
    if level is None or level == "":
        return UNKNOWN_LEVEL
    label = str(level)
    match = _NUMBER_PATTERN.search(label)
    if match:
        return int(match.group())
    if _CANTRIP_PATTERN.search(label):
        return CANTRIP_LEVEL
    return UNKNOWN_LEVEL


__all__ = ["level_to_number"]
