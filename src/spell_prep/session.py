"""Application session: catalog, selection engine and profile store wired together.

The session is what a renderer talks to. Every call runs to completion
before returning; a call that changes the prepared or ignored set is
persisted immediately with one write of the profile list. Filter, sort,
search and card expansion changes are never written.

Example:
    >>> session = open_session()
    >>> session.prepare("Fireball")
    True
    >>> session.set_ignored("Fireball", True)
    True
    >>> session.view().prepared_count
    0
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from spell_prep.catalog.loader import Catalog, load_catalog
from spell_prep.core.config import ProfileSettings, Settings, get_settings
from spell_prep.core.exceptions import StorageError
from spell_prep.core.logging import bind_context, get_logger
from spell_prep.engine.projector import SpellView
from spell_prep.engine.selection import SelectionEngine
from spell_prep.models.profile import Profile
from spell_prep.models.selection import FilterState
from spell_prep.storage.backends import KeyValueStore, SQLiteKeyValueStore
from spell_prep.storage.profiles import ProfileStore

logger = get_logger(__name__)


class SpellPrepSession:
    """Single-user controller over one catalog and one profile store.

    Attributes:
        last_save_error: The most recent autosave failure, cleared by the
            next successful save. The in-memory selection stays authoritative
            when a write fails.
    """

    def __init__(
        self,
        catalog: Catalog,
        backend: KeyValueStore,
        *,
        profile_settings: ProfileSettings | None = None,
    ) -> None:
        """Load profiles and activate the remembered one.

        Args:
            catalog: The loaded spell catalog.
            backend: Durable key-value storage for profiles.
            profile_settings: Profile naming and storage keys.
        """
        profile_settings = profile_settings or ProfileSettings()
        self._engine = SelectionEngine(catalog)
        self._store = ProfileStore(
            backend,
            self._engine,
            default_profile_name=profile_settings.default_profile_name,
            profiles_key=profile_settings.profiles_key,
            active_profile_key=profile_settings.active_profile_key,
        )
        self.last_save_error: StorageError | None = None

        self._store.load()
        self._on_profile_changed(self._store.restore_active())

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def catalog(self) -> Catalog:
        return self._engine.catalog

    @property
    def engine(self) -> SelectionEngine:
        return self._engine

    @property
    def store(self) -> ProfileStore:
        return self._store

    @property
    def profile_names(self) -> list[str]:
        return self._store.profile_names

    @property
    def active_profile_name(self) -> str | None:
        return self._store.active_name

    def view(self) -> SpellView:
        """Project the catalog through the current selection."""
        return self._engine.compute_view()

    # =========================================================================
    # Selection (persisted)
    # =========================================================================

    def prepare(self, name: str) -> bool:
        return self._persist_if(self._engine.prepare(name))

    def unprepare(self, name: str) -> bool:
        return self._persist_if(self._engine.unprepare(name))

    def toggle_prepared(self, name: str) -> bool:
        return self._persist_if(self._engine.toggle_prepared(name))

    def set_ignored(self, name: str, ignored: bool) -> bool:
        return self._persist_if(self._engine.set_ignored(name, ignored))

    # =========================================================================
    # Filters & UI state (not persisted)
    # =========================================================================

    def set_filter(self, **changes: Any) -> FilterState:
        return self._engine.set_filter(**changes)

    def set_class_filter(self, class_name: str) -> FilterState:
        return self._engine.set_class_filter(class_name)

    def set_min_level(self, level: str) -> FilterState:
        return self._engine.set_min_level(level)

    def set_max_level(self, level: str) -> FilterState:
        return self._engine.set_max_level(level)

    def set_sort_method(self, sort_method: str) -> FilterState:
        return self._engine.set_sort_method(sort_method)

    def set_search_term(self, term: str) -> FilterState:
        return self._engine.set_search_term(term)

    def reset_filter(self) -> FilterState:
        return self._engine.reset_filter()

    def toggle_expanded(self, name: str) -> bool:
        return self._engine.toggle_expanded(name)

    # =========================================================================
    # Profiles
    # =========================================================================

    def switch_profile(self, name: str) -> Profile:
        """Activate another profile.

        Raises:
            ProfileNotFoundError: If no such profile exists.
        """
        return self._change_profile(self._store.activate, name)

    def create_profile(self, name: str) -> Profile:
        """Create and activate a new empty profile.

        Raises:
            DuplicateNameError: If the name is blank or taken.
        """
        return self._change_profile(self._store.create, name)

    def delete_profile(self, name: str) -> Profile:
        """Delete a profile; the first remaining profile becomes active.

        Raises:
            ProfileNotFoundError: If no such profile exists.
            LastProfileError: If it is the only profile.
        """
        return self._change_profile(self._store.delete, name)

    # =========================================================================
    # Internals
    # =========================================================================

    def _on_profile_changed(self, profile: Profile) -> Profile:
        bind_context(profile=profile.name)
        return profile

    def _change_profile(self, change: Callable[[str], Profile], name: str) -> Profile:
        # The store switches the engine before writing, so a failed write
        # still leaves a consistent active profile in memory.
        try:
            profile = change(name)
        except StorageError as exc:
            active = self._store.active_profile
            if active is None:
                raise
            self._record_save_error(exc)
            profile = active
        else:
            self.last_save_error = None
        return self._on_profile_changed(profile)

    def _persist_if(self, changed: bool) -> bool:
        if not changed:
            return False
        try:
            self._store.save()
        except StorageError as exc:
            self._record_save_error(exc)
        else:
            self.last_save_error = None
        return True

    def _record_save_error(self, exc: StorageError) -> None:
        self.last_save_error = exc
        logger.error("Autosave failed; selection kept in memory", error=str(exc))


def open_session(
    settings: Settings | None = None,
    *,
    catalog: Catalog | None = None,
    backend: KeyValueStore | None = None,
) -> SpellPrepSession:
    """Build a session from application settings.

    Args:
        settings: Application settings; defaults to ``get_settings()``.
        catalog: Pre-loaded catalog; defaults to ``settings.catalog.catalog_path``.
        backend: Storage backend; defaults to SQLite at
            ``settings.storage.database_path``.

    Returns:
        A session with the remembered profile active.
    """
    settings = settings or get_settings()
    if catalog is None:
        catalog = load_catalog(settings.catalog.catalog_path)
    if backend is None:
        backend = SQLiteKeyValueStore(settings.storage.database_path)
    return SpellPrepSession(catalog, backend, profile_settings=settings.profiles)


__all__ = [
    "SpellPrepSession",
    "open_session",
]
