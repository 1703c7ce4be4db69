"""Profile model: a named snapshot of prepared and ignored spells."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


def normalize_profile_name(name: str) -> str:
    """Trim surrounding whitespace from a user-supplied profile name."""
    return name.strip()


class Profile(BaseModel):
    """A persisted, switchable spell selection.

    Filter, search and sort settings are not part of a profile.

    Attributes:
        name: Unique, non-empty profile name.
        prepared: Names of prepared spells.
        ignored: Prepared spells excluded from the prepared count.

    Example:
        >>> Profile(name=" Cleric ", prepared=["Bless"], ignored=["Bless", "Shield"])
        Profile(name='Cleric', prepared=('Bless',), ignored=('Bless',))
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    prepared: tuple[str, ...] = ()
    ignored: tuple[str, ...] = ()

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        if isinstance(value, str):
            return normalize_profile_name(value)
        return value

    @field_validator("prepared", mode="after")
    @classmethod
    def dedupe_prepared(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    @field_validator("ignored", mode="after")
    @classmethod
    def enforce_ignored_subset(
        cls, value: tuple[str, ...], info: ValidationInfo
    ) -> tuple[str, ...]:
        """Drop duplicates and any ignored name that is not prepared."""
        prepared = set(info.data.get("prepared", ()))
        return tuple(name for name in dict.fromkeys(value) if name in prepared)


__all__ = [
    "Profile",
    "normalize_profile_name",
]
