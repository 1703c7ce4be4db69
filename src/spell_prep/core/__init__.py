"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        SpellPrepError: Base exception for all application errors.
        DuplicateNameError, LastProfileError, ProfileNotFoundError: Profile errors.
        CatalogError, StorageError, ConfigurationError.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from spell_prep.core.config import (
    CatalogSettings,
    ProfileSettings,
    Settings,
    StorageSettings,
    UISettings,
    clear_settings_cache,
    get_settings,
)
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
from spell_prep.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "SpellPrepError",
    "ProfileError",
    "DuplicateNameError",
    "LastProfileError",
    "ProfileNotFoundError",
    "CatalogError",
    "StorageError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "StorageSettings",
    "CatalogSettings",
    "ProfileSettings",
    "UISettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
