"""Storage module for Spell Prep persistence.

Provides:
- Key-value backends (SQLite on disk, in-memory for tests)
- The profile store that persists prepared/ignored selections
"""

from spell_prep.storage.backends import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from spell_prep.storage.profiles import ProfileStore

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "ProfileStore",
]
