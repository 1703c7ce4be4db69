"""Configuration management for Spell Prep.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files, and runtime overrides.

Example:
    >>> from spell_prep.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.profiles.default_profile_name)
    'Default'

Environment Variables:
    SPELL_PREP_DATABASE_PATH: Path to the SQLite database holding profiles
    SPELL_PREP_CATALOG_PATH: Path to a spell catalog JSON file
    SPELL_PREP_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spell_prep.core.constants import (
    ACTIVE_PROFILE_KEY,
    AVAILABLE_PREVIEW_LENGTH,
    DEFAULT_PROFILE_NAME,
    PREPARED_PREVIEW_LENGTH,
    PROFILES_KEY,
)
from spell_prep.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for durable storage.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPELL_PREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/spell_prep.db"),
        description="Path to SQLite database",
    )

    @field_validator("database_path", mode="after")
    @classmethod
    def ensure_parent_exists(cls, value: Path) -> Path:
        """Create the database's parent directory if necessary."""
        value.parent.mkdir(parents=True, exist_ok=True)
        return value


class CatalogSettings(BaseSettings):
    """Configuration for the spell catalog source.

    Attributes:
        catalog_path: JSON file to load spells from. None uses the
            bundled sample catalog.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPELL_PREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    catalog_path: Path | None = Field(
        default=None,
        description="Spell catalog JSON file",
    )


class ProfileSettings(BaseSettings):
    """Configuration for profile persistence.

    Attributes:
        default_profile_name: Name of the profile seeded on first run.
        profiles_key: Storage key holding the serialized profile list.
        active_profile_key: Storage key holding the active profile name.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPELL_PREP_PROFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_profile_name: str = Field(
        default=DEFAULT_PROFILE_NAME,
        min_length=1,
        description="Profile seeded when none exist",
    )
    profiles_key: str = Field(
        default=PROFILES_KEY,
        min_length=1,
        description="Storage key for the profile list",
    )
    active_profile_key: str = Field(
        default=ACTIVE_PROFILE_KEY,
        min_length=1,
        description="Storage key for the active profile name",
    )

    @model_validator(mode="after")
    def validate_distinct_keys(self) -> "ProfileSettings":
        """Ensure the two storage keys do not collide.

        Raises:
            ConfigurationError: If both keys are equal.
        """
        if self.profiles_key == self.active_profile_key:
            raise ConfigurationError(
                f"profiles_key and active_profile_key must differ "
                f"(both are {self.profiles_key!r})",
                config_key="active_profile_key",
            )
        return self


class UISettings(BaseSettings):
    """Configuration for the Streamlit UI.

    Attributes:
        page_title: Browser page title.
        available_preview_length: Description preview length on available cards.
        prepared_preview_length: Description preview length on prepared cards.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPELL_PREP_UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    page_title: str = Field(
        default="Spell Prep",
        description="Browser page title",
    )
    available_preview_length: int = Field(
        default=AVAILABLE_PREVIEW_LENGTH,
        ge=10,
        le=2000,
        description="Description preview length for available cards",
    )
    prepared_preview_length: int = Field(
        default=PREPARED_PREVIEW_LENGTH,
        ge=10,
        le=2000,
        description="Description preview length for prepared cards",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines instead of console output.
        storage: Storage settings.
        catalog: Catalog source settings.
        profiles: Profile persistence settings.
        ui: UI settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPELL_PREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Spell Prep",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    profiles: ProfileSettings = Field(default_factory=ProfileSettings)
    ui: UISettings = Field(default_factory=UISettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "CatalogSettings",
    "ProfileSettings",
    "UISettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
