"""Profile store: named, switchable snapshots of the spell selection.

Profiles are persisted as a single JSON array under one key of a
key-value backend::

    [{"name": "Default", "prepared": ["Bless"], "ignored": []}, ...]

The name of the active profile is kept under a second key so the same
profile comes back on the next start.

Lifecycle:
    UNINITIALIZED --load()--> LOADED --activate()--> ACTIVE

Failed operations (unknown name, duplicate name, deleting the last
profile) raise before anything is modified.

Example:
    >>> store = ProfileStore(InMemoryKeyValueStore(), engine)
    >>> [p.name for p in store.load()]
    ['Default']
    >>> store.create("Cleric").name
    'Cleric'
    >>> store.active_name
    'Cleric'
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from spell_prep.core.constants import (
    ACTIVE_PROFILE_KEY,
    DEFAULT_PROFILE_NAME,
    PROFILES_KEY,
)
from spell_prep.core.exceptions import (
    DuplicateNameError,
    LastProfileError,
    ProfileNotFoundError,
    StorageError,
)
from spell_prep.core.logging import get_logger
from spell_prep.engine.selection import SelectionEngine
from spell_prep.models.enums import StoreState
from spell_prep.models.profile import Profile, normalize_profile_name
from spell_prep.storage.backends import KeyValueStore

logger = get_logger(__name__)


class ProfileStore:
    """Persists profiles and swaps them in and out of a selection engine."""

    def __init__(
        self,
        backend: KeyValueStore,
        engine: SelectionEngine,
        *,
        default_profile_name: str = DEFAULT_PROFILE_NAME,
        profiles_key: str = PROFILES_KEY,
        active_profile_key: str = ACTIVE_PROFILE_KEY,
    ) -> None:
        """Initialize the store.

        Args:
            backend: Durable key-value storage.
            engine: Selection engine whose prepared/ignored sets the active
                profile drives.
            default_profile_name: Name of the profile seeded on first run.
            profiles_key: Storage key for the profile list.
            active_profile_key: Storage key for the active profile name.
        """
        self._backend = backend
        self._engine = engine
        self._default_profile_name = default_profile_name
        self._profiles_key = profiles_key
        self._active_profile_key = active_profile_key

        self._profiles: list[Profile] = []
        self._active_name: str | None = None
        self._remembered_name: str | None = None
        self._state = StoreState.UNINITIALIZED

    # =========================================================================
    # Read Access
    # =========================================================================

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def profiles(self) -> tuple[Profile, ...]:
        return tuple(self._profiles)

    @property
    def profile_names(self) -> list[str]:
        return [profile.name for profile in self._profiles]

    @property
    def active_name(self) -> str | None:
        return self._active_name

    @property
    def active_profile(self) -> Profile | None:
        index = None if self._active_name is None else self._index_of(self._active_name)
        return None if index is None else self._profiles[index]

    def get(self, name: str) -> Profile:
        """Return the profile with the given name.

        Raises:
            ProfileNotFoundError: If no such profile exists.
        """
        index = self._index_of(name)
        if index is None:
            raise ProfileNotFoundError("Profile not found", profile_name=name)
        return self._profiles[index]

    def __contains__(self, name: object) -> bool:
        return any(profile.name == name for profile in self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def load(self) -> list[Profile]:
        """Read persisted profiles, seeding a default profile if none exist.

        Corrupt or missing data counts as "no profiles". After this call
        at least one profile exists and none is active.

        Returns:
            The loaded profiles in creation order.
        """
        profiles = self._parse(self._read(self._profiles_key))
        self._profiles = profiles
        self._active_name = None

        if not profiles:
            self._profiles = [Profile(name=self._default_profile_name)]
            self._write_profiles()
            logger.info("Seeded default profile", profile=self._default_profile_name)

        self._remembered_name = self._read(self._active_profile_key)
        self._state = StoreState.LOADED
        logger.info("Profiles loaded", count=len(self._profiles))
        return list(self._profiles)

    def restore_active(self) -> Profile:
        """Activate the profile that was active last time, else the first one."""
        self._ensure_loaded()
        name = self._remembered_name
        if name is None or name not in self:
            name = self._profiles[0].name
        return self.activate(name)

    def activate(self, name: str) -> Profile:
        """Make a profile active and load its selection into the engine.

        The outgoing profile is updated from the engine first. Filter,
        search, sort and expansion state are not touched.

        Raises:
            ProfileNotFoundError: If no such profile exists.
        """
        self._ensure_loaded()
        if name not in self:
            raise ProfileNotFoundError("Cannot activate unknown profile", profile_name=name)

        self._sync_active()
        profile = self.get(name)
        self._engine.replace_selection(profile.prepared, profile.ignored)
        self._active_name = profile.name
        self._state = StoreState.ACTIVE

        self._write_profiles()
        self._backend.set(self._active_profile_key, profile.name)
        logger.info(
            "Profile activated",
            profile=profile.name,
            prepared=len(profile.prepared),
            ignored=len(profile.ignored),
        )
        return profile

    def create(self, name: str) -> Profile:
        """Append a new empty profile and activate it.

        Raises:
            DuplicateNameError: If the trimmed name is empty or taken.
        """
        self._ensure_loaded()
        clean_name = normalize_profile_name(name)
        if not clean_name:
            raise DuplicateNameError("Profile name must not be empty", profile_name=name)
        if clean_name in self:
            raise DuplicateNameError("Profile already exists", profile_name=clean_name)

        self._profiles.append(Profile(name=clean_name))
        logger.info("Profile created", profile=clean_name)
        return self.activate(clean_name)

    def delete(self, name: str) -> Profile:
        """Remove a profile and activate the first remaining one.

        Returns:
            The newly active profile.

        Raises:
            ProfileNotFoundError: If no such profile exists.
            LastProfileError: If it is the only profile.
        """
        self._ensure_loaded()
        index = self._index_of(name)
        if index is None:
            raise ProfileNotFoundError("Cannot delete unknown profile", profile_name=name)
        if len(self._profiles) == 1:
            raise LastProfileError("Cannot delete the last profile", profile_name=name)

        del self._profiles[index]
        if self._active_name == name:
            # The engine still holds the deleted profile's selection.
            self._active_name = None
            self._state = StoreState.LOADED
        logger.info("Profile deleted", profile=name)
        return self.activate(self._profiles[0].name)

    def save(self) -> None:
        """Copy the engine's selection into the active profile and persist.

        Every profile is written, replacing the stored list in full.
        """
        self._ensure_loaded()
        self._sync_active()
        self._write_profiles()

    # =========================================================================
    # Internals
    # =========================================================================

    def _ensure_loaded(self) -> None:
        if self._state is StoreState.UNINITIALIZED:
            self.load()

    def _index_of(self, name: str) -> int | None:
        for index, profile in enumerate(self._profiles):
            if profile.name == name:
                return index
        return None

    def _sync_active(self) -> None:
        if self._state is not StoreState.ACTIVE or self._active_name is None:
            return
        index = self._index_of(self._active_name)
        if index is None:
            return
        self._profiles[index] = Profile(
            name=self._active_name,
            prepared=self._engine.prepared_in_order(),
            ignored=self._engine.ignored_in_order(),
        )

    def _read(self, key: str) -> str | None:
        try:
            return self._backend.get(key)
        except StorageError as exc:
            logger.warning("Stored value is unreadable", key=key, error=exc.message)
            return None

    def _write_profiles(self) -> None:
        payload = json.dumps([profile.model_dump(mode="json") for profile in self._profiles])
        self._backend.set(self._profiles_key, payload)
        logger.info("Profiles saved", count=len(self._profiles), active=self._active_name)

    def _parse(self, raw: str | None) -> list[Profile]:
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Stored profiles are not valid JSON", error=str(exc))
            return []
        if not isinstance(payload, list):
            logger.warning("Stored profiles are not a list", kind=type(payload).__name__)
            return []

        profiles: list[Profile] = []
        seen: set[str] = set()
        for index, entry in enumerate(payload):
            try:
                profile = Profile.model_validate(entry)
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid stored profile",
                    index=index,
                    errors=exc.error_count(),
                )
                continue
            if profile.name in seen:
                logger.warning("Skipping duplicate stored profile", profile=profile.name)
                continue
            seen.add(profile.name)
            profiles.append(profile)
        return profiles


__all__ = ["ProfileStore"]
