"""Pytest configuration and shared fixtures.

This module provides common fixtures for the Spell Prep test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from spell_prep.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_log_context() -> Generator[None, None, None]:
    """Keep profile context bound by one test out of the next."""
    from spell_prep.core.logging import clear_context

    clear_context()
    yield
    clear_context()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "SPELL_PREP_DEBUG": "true",
        "SPELL_PREP_LOG_LEVEL": "DEBUG",
        "SPELL_PREP_DATABASE_PATH": str(tmp_path / "db" / "spells.db"),
        "SPELL_PREP_PROFILE_DEFAULT_PROFILE_NAME": "Main",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def sample_spell_data() -> list[dict[str, Any]]:
    """Provide raw spell records in catalog order.

    Returns:
        List of spell dictionaries.
    """
    return [
        {
            "name": "Light",
            "level": "cantrip",
            "classes": ["Bard", "Cleric", "Wizard"],
            "description": "You touch one object and it sheds bright light.",
        },
        {
            "name": "Fire Bolt",
            "level": "Cantrip",
            "type": "Evocation cantrip",
            "classes": ["Sorcerer", "Wizard"],
            "description": "You hurl a mote of fire at a creature.",
        },
        {
            "name": "Bless",
            "level": "1",
            "classes": ["Cleric", "Paladin"],
            "description": "You bless up to three creatures.",
        },
        {
            "name": "Shield",
            "level": "1st-level",
            "classes": ["Wizard"],
            "description": "An invisible barrier of magical force appears.",
        },
        {
            "name": "Misty Step",
            "level": "2",
            "classes": ["Sorcerer", "Warlock", "Wizard"],
            "description": "You teleport up to 30 feet.",
        },
        {
            "name": "Fireball",
            "level": "3",
            "classes": ["Sorcerer", "Wizard"],
            "description": "A bright streak blossoms into an explosion of flame.",
        },
        {
            "name": "Wish",
            "level": "9",
            "classes": ["Wizard"],
            "description": "The mightiest spell a mortal can cast.",
        },
        {
            "name": "Mystery Rite",
            "level": "Ritual",
            "classes": [],
            "description": None,
        },
    ]


@pytest.fixture
def catalog(sample_spell_data: list[dict[str, Any]]) -> Any:
    """Create a Catalog from the sample spell data."""
    from spell_prep.catalog import Catalog

    return Catalog.from_records(sample_spell_data)


@pytest.fixture
def catalog_file(tmp_path: Path, sample_spell_data: list[dict[str, Any]]) -> Path:
    """Write the sample spell data to a JSON file."""
    import json

    path = tmp_path / "spells.json"
    path.write_text(json.dumps(sample_spell_data), encoding="utf-8")
    return path


# =============================================================================
# Engine & Storage Fixtures
# =============================================================================


@pytest.fixture
def engine(catalog: Any) -> Any:
    """Create a SelectionEngine over the sample catalog."""
    from spell_prep.engine import SelectionEngine

    return SelectionEngine(catalog)


@pytest.fixture
def memory_backend() -> Any:
    """Create an empty in-memory key-value backend."""
    from spell_prep.storage import InMemoryKeyValueStore

    return InMemoryKeyValueStore()


@pytest.fixture
def sqlite_backend(tmp_path: Path) -> Any:
    """Create a SQLite key-value backend in a temporary directory."""
    from spell_prep.storage import SQLiteKeyValueStore

    return SQLiteKeyValueStore(tmp_path / "data" / "spell_prep.db")


@pytest.fixture
def profile_store(memory_backend: Any, engine: Any) -> Any:
    """Create a loaded ProfileStore with the default profile active."""
    from spell_prep.storage import ProfileStore

    store = ProfileStore(memory_backend, engine)
    store.load()
    store.restore_active()
    return store
