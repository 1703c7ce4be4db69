"""Spell catalog loading and lookup.

The catalog is loaded once, before any selection engine exists, and is
never modified afterwards. Raw records are normalized into SpellRecord
instances at load time.

Example:
    >>> catalog = load_catalog()  # bundled sample catalog
    >>> "Fireball" in catalog
    True
    >>> catalog.class_options()[:2]
    ['Bard', 'Cleric']
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from spell_prep.catalog.levels import level_to_number
from spell_prep.core.exceptions import CatalogError
from spell_prep.core.logging import get_logger
from spell_prep.models.spell import SpellRecord

logger = get_logger(__name__)

BUNDLED_CATALOG = "spells.json"


class Catalog:
    """Immutable, ordered collection of spell records keyed by name."""

    def __init__(self, records: Iterable[SpellRecord] = ()) -> None:
        """Initialize the catalog.

        Args:
            records: Normalized spell records in catalog order. When two
                records share a name, the first one wins.
        """
        by_name: dict[str, SpellRecord] = {}
        for record in records:
            if record.name in by_name:
                logger.warning("Duplicate spell name in catalog", spell=record.name)
                continue
            by_name[record.name] = record
        self._by_name = by_name
        self._records = tuple(by_name.values())

    @classmethod
    def from_records(
        cls,
        raw_records: Iterable[Mapping[str, Any] | SpellRecord],
        *,
        source: str | None = None,
    ) -> Catalog:
        """Build a catalog from raw spell mappings.

        Args:
            raw_records: Spell mappings (or already-built records).
            source: Description of where the records came from, for errors.

        Returns:
            A new Catalog.

        Raises:
            CatalogError: If a record fails validation.
        """
        records: list[SpellRecord] = []
        for index, raw in enumerate(raw_records):
            if isinstance(raw, SpellRecord):
                records.append(raw)
                continue
            try:
                records.append(SpellRecord.model_validate(raw))
            except ValidationError as exc:
                raise CatalogError(
                    f"Invalid spell record at index {index}",
                    source=source,
                    details={"errors": exc.errors(include_url=False)},
                ) from exc
        return cls(records)

    @property
    def records(self) -> tuple[SpellRecord, ...]:
        return self._records

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def get(self, name: str) -> SpellRecord | None:
        """Look up a spell by exact name."""
        return self._by_name.get(name)

    def class_options(self) -> list[str]:
        """Sorted unique class names, for the class filter."""
        return sorted({cls for record in self._records for cls in record.classes})

    def level_options(self) -> list[str]:
        """Unique level labels ordered by numeric level, then label."""
        labels = {record.level for record in self._records if record.level}
        return sorted(labels, key=lambda label: (level_to_number(label), label))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[SpellRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Catalog(spells={len(self._records)})"


def _extract_records(payload: Any, source: str) -> list[Any]:
    if isinstance(payload, Mapping):
        payload = payload.get("spells")
    if not isinstance(payload, list):
        raise CatalogError(
            "Catalog must be a JSON array or an object with a 'spells' array",
            source=source,
        )
    return payload


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Load and normalize a spell catalog from JSON.

    Args:
        path: JSON file holding an array of spells (or ``{"spells": [...]}``).
            None loads the catalog bundled with the package.

    Returns:
        The loaded Catalog.

    Raises:
        CatalogError: If the file cannot be read, is not JSON, or holds
            invalid records.
    """
    if path is None:
        source = f"package:{BUNDLED_CATALOG}"
        resource = resources.files("spell_prep.data").joinpath(BUNDLED_CATALOG)
        try:
            text = resource.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogError("Bundled catalog is missing", source=source) from exc
    else:
        source = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogError(f"Cannot read catalog: {exc}", source=source) from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog is not valid JSON: {exc}", source=source) from exc

    catalog = Catalog.from_records(_extract_records(payload, source), source=source)
    logger.info("Catalog loaded", source=source, spells=len(catalog))
    return catalog


__all__ = [
    "Catalog",
    "load_catalog",
]
