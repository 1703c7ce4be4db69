"""Integration tests for the session controller.

Tests the catalog, engine and profile store working together the way
the Streamlit page drives them.
"""

from __future__ import annotations

import json

import pytest

from spell_prep.catalog import Catalog
from spell_prep.core.config import ProfileSettings
from spell_prep.core.exceptions import LastProfileError, StorageError
from spell_prep.session import SpellPrepSession
from spell_prep.storage import InMemoryKeyValueStore


class FlakyBackend(InMemoryKeyValueStore):
    """In-memory backend whose writes can be switched off."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = False

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("Disk full", key=key)
        super().set(key, value)


@pytest.fixture
def session(catalog: Catalog, memory_backend: InMemoryKeyValueStore) -> SpellPrepSession:
    return SpellPrepSession(catalog, memory_backend)


class TestSessionFlow:
    """End-to-end selection behavior."""

    def test_starts_on_default_profile(self, session: SpellPrepSession) -> None:
        assert session.profile_names == ["Default"]
        assert session.active_profile_name == "Default"
        assert session.view().prepared_count == 0

    def test_prepare_ignore_unprepare(self, session: SpellPrepSession) -> None:
        assert session.prepare("Fireball") is True
        assert session.view().prepared_count == 1

        assert session.set_ignored("Fireball", True) is True
        view = session.view()
        assert view.prepared_count == 0
        assert [s.name for s in view.prepared] == ["Fireball"]

        assert session.unprepare("Fireball") is True
        view = session.view()
        assert view.prepared == ()
        assert view.ignored_names == frozenset()

    def test_each_change_writes_once(
        self, session: SpellPrepSession, memory_backend: InMemoryKeyValueStore
    ) -> None:
        """Test every selection change is persisted with a single write."""
        before = memory_backend.write_count

        session.prepare("Bless")
        session.toggle_prepared("Shield")
        session.set_ignored("Shield", True)
        session.unprepare("Bless")

        assert memory_backend.write_count == before + 4
        stored = json.loads(memory_backend.get("profiles") or "[]")
        assert stored == [{"name": "Default", "prepared": ["Shield"], "ignored": ["Shield"]}]

    def test_no_ops_do_not_write(
        self, session: SpellPrepSession, memory_backend: InMemoryKeyValueStore
    ) -> None:
        session.prepare("Bless")
        before = memory_backend.write_count

        assert session.prepare("Bless") is False
        assert session.unprepare("Wish") is False
        assert session.set_ignored("Wish", True) is False
        assert session.prepare("Unknown Spell") is False

        assert memory_backend.write_count == before

    def test_filters_and_expansion_not_persisted(
        self, session: SpellPrepSession, memory_backend: InMemoryKeyValueStore
    ) -> None:
        before = memory_backend.write_count

        session.set_class_filter("Wizard")
        session.set_min_level("1")
        session.set_max_level("3")
        session.set_search_term("fire")
        session.set_sort_method("alpha")
        session.set_filter(class_filter="Sorcerer")
        session.toggle_expanded("Fireball")
        session.reset_filter()

        assert memory_backend.write_count == before

    def test_filtered_view(self, session: SpellPrepSession) -> None:
        session.set_class_filter("Sorcerer")
        session.set_sort_method("level")

        names = [s.name for s in session.view().available]

        assert names == ["Fire Bolt", "Misty Step", "Fireball"]

    def test_profiles_keep_separate_selections(self, session: SpellPrepSession) -> None:
        session.prepare("Bless")
        session.create_profile("Wizard")
        session.prepare("Shield")

        session.switch_profile("Default")
        assert session.view().prepared_names == frozenset({"Bless"})

        session.switch_profile("Wizard")
        assert session.view().prepared_names == frozenset({"Shield"})

    def test_delete_profile(self, session: SpellPrepSession) -> None:
        session.create_profile("Wizard")

        assert session.delete_profile("Wizard").name == "Default"
        with pytest.raises(LastProfileError):
            session.delete_profile("Default")

    def test_custom_profile_settings(
        self, catalog: Catalog, memory_backend: InMemoryKeyValueStore
    ) -> None:
        settings = ProfileSettings(
            default_profile_name="Main",
            profiles_key="spell_profiles",
            active_profile_key="spell_active",
        )

        session = SpellPrepSession(catalog, memory_backend, profile_settings=settings)

        assert session.active_profile_name == "Main"
        assert memory_backend.get("spell_active") == "Main"
        assert memory_backend.get("profiles") is None


class TestAutosaveFailure:
    """Tests for behavior when the backend rejects writes."""

    def test_selection_kept_when_write_fails(self, catalog: Catalog) -> None:
        backend = FlakyBackend()
        session = SpellPrepSession(catalog, backend)
        backend.fail_writes = True

        assert session.prepare("Bless") is True

        assert session.view().prepared_names == frozenset({"Bless"})
        assert isinstance(session.last_save_error, StorageError)

    def test_error_cleared_by_next_save(self, catalog: Catalog) -> None:
        backend = FlakyBackend()
        session = SpellPrepSession(catalog, backend)
        backend.fail_writes = True
        session.prepare("Bless")

        backend.fail_writes = False
        session.prepare("Shield")

        assert session.last_save_error is None
        stored = json.loads(backend.get("profiles") or "[]")
        assert stored[0]["prepared"] == ["Bless", "Shield"]

    def test_profile_change_survives_write_failure(self, catalog: Catalog) -> None:
        """Test profile operations keep working in memory when writes fail."""
        backend = FlakyBackend()
        session = SpellPrepSession(catalog, backend)
        session.prepare("Bless")
        backend.fail_writes = True

        created = session.create_profile("Wizard")

        assert created.name == "Wizard"
        assert session.active_profile_name == "Wizard"
        assert isinstance(session.last_save_error, StorageError)

        session.switch_profile("Default")
        assert session.view().prepared_names == frozenset({"Bless"})

        backend.fail_writes = False
        session.delete_profile("Wizard")
        assert session.last_save_error is None
        stored = json.loads(backend.get("profiles") or "[]")
        assert [p["name"] for p in stored] == ["Default"]
