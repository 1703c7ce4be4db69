"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from spell_prep.core.exceptions import (
    CatalogError,
    ConfigurationError,
    DuplicateNameError,
    LastProfileError,
    ProfileError,
    ProfileNotFoundError,
    SpellPrepError,
    StorageError,
)


class TestSpellPrepError:
    """Tests for the base SpellPrepError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = SpellPrepError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = SpellPrepError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(SpellPrepError("Test", details={"x": 1}))
        assert "SpellPrepError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestProfileExceptions:
    """Tests for profile-related exceptions."""

    @pytest.mark.parametrize(
        "exc_type",
        [DuplicateNameError, LastProfileError, ProfileNotFoundError],
    )
    def test_profile_name_in_details(self, exc_type: type[ProfileError]) -> None:
        """Test each profile error carries the profile name."""
        exc = exc_type("Failed", profile_name="Cleric")
        assert exc.details["profile_name"] == "Cleric"
        assert isinstance(exc, ProfileError)
        assert isinstance(exc, SpellPrepError)

    def test_empty_profile_name_is_kept(self) -> None:
        """Test an empty name is still reported."""
        exc = DuplicateNameError("Blank", profile_name="")
        assert exc.details["profile_name"] == ""


class TestOtherExceptions:
    """Tests for catalog, storage and configuration exceptions."""

    def test_catalog_error_with_source(self) -> None:
        """Test CatalogError with source."""
        exc = CatalogError("Bad JSON", source="spells.json")
        assert exc.details["source"] == "spells.json"

    def test_storage_error_with_key(self) -> None:
        """Test StorageError with key."""
        exc = StorageError("Write failed", key="profiles")
        assert exc.details["key"] == "profiles"

    def test_configuration_error(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Bad key", config_key="profiles_key")
        assert exc.details["config_key"] == "profiles_key"


class TestExceptionChaining:
    """Tests for exception chaining behavior."""

    def test_raise_from(self) -> None:
        """Test that exceptions can be properly chained."""
        original = ValueError("Original error")

        with pytest.raises(CatalogError) as exc_info:
            try:
                raise original
            except ValueError as e:
                raise CatalogError("Wrapped error") from e

        assert exc_info.value.__cause__ is original
