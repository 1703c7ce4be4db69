"""Custom exception hierarchy for Spell Prep.

All exceptions inherit from SpellPrepError, enabling unified error handling
at the application boundary while preserving domain-specific context in the
``details`` mapping.

Example:
    >>> from spell_prep.core.exceptions import DuplicateNameError
    >>> raise DuplicateNameError("Profile already exists", profile_name="Cleric")
"""

from __future__ import annotations

from typing import Any


class SpellPrepError(Exception):
    """Base exception for all Spell Prep errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Profile Domain Exceptions
# =============================================================================


class ProfileError(SpellPrepError):
    """Base exception for profile management errors.

    Raised by the profile store when a requested profile operation cannot
    be carried out. The store and the selection engine are left unchanged.
    """

    def __init__(
        self,
        message: str,
        *,
        profile_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize profile error with profile context.

        Args:
            message: Human-readable error description.
            profile_name: Name of the profile involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if profile_name is not None:
            combined_details["profile_name"] = profile_name
        super().__init__(message, details=combined_details)


class DuplicateNameError(ProfileError):
    """Raised when creating a profile whose name is taken or blank."""


class LastProfileError(ProfileError):
    """Raised when deleting the only remaining profile."""


class ProfileNotFoundError(ProfileError):
    """Raised when a profile name does not exist in the store."""


# =============================================================================
# Catalog & Storage Exceptions
# =============================================================================


class CatalogError(SpellPrepError):
    """Raised when the spell catalog cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error with source context.

        Args:
            message: Human-readable error description.
            source: File path or description of the catalog source.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source:
            combined_details["source"] = source
        super().__init__(message, details=combined_details)


class StorageError(SpellPrepError):
    """Raised when the key-value backend fails to read or write."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with key context.

        Args:
            message: Human-readable error description.
            key: The storage key being accessed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if key:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(SpellPrepError):
    """Raised when application configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    "SpellPrepError",
    # Profile exceptions
    "ProfileError",
    "DuplicateNameError",
    "LastProfileError",
    "ProfileNotFoundError",
    # Catalog & storage exceptions
    "CatalogError",
    "StorageError",
    # Configuration exceptions
    "ConfigurationError",
]
