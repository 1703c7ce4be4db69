"""Application-wide constants for Spell Prep."""

from __future__ import annotations

# =============================================================================
# Filter Values
# =============================================================================

ALL = "all"
"""Filter value meaning "no restriction" for class and level filters."""

CANTRIP_LEVEL = 0
"""Numeric level assigned to cantrips."""

UNKNOWN_LEVEL = 100
"""Numeric level for labels with no number and no cantrip marker."""

# =============================================================================
# Profiles
# =============================================================================

DEFAULT_PROFILE_NAME = "Default"
"""Profile seeded when no profiles are persisted."""

PROFILES_KEY = "profiles"
"""Storage key holding the JSON profile list."""

ACTIVE_PROFILE_KEY = "active_profile"
"""Storage key holding the name of the active profile."""

# =============================================================================
# Display Limits
# =============================================================================

AVAILABLE_PREVIEW_LENGTH = 140
"""Description characters shown on an available spell card."""

PREPARED_PREVIEW_LENGTH = 120
"""Description characters shown on a prepared spell card."""
