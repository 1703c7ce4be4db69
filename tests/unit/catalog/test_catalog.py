"""Tests for catalog loading and lookup."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from spell_prep.catalog import Catalog, load_catalog
from spell_prep.core.exceptions import CatalogError
from spell_prep.models import SpellRecord


class TestCatalog:
    """Tests for the Catalog container."""

    def test_order_preserved(self, catalog: Catalog) -> None:
        assert catalog.names[:3] == ("Light", "Fire Bolt", "Bless")
        assert len(catalog) == 8

    def test_lookup(self, catalog: Catalog) -> None:
        assert "Fireball" in catalog
        assert "fireball" not in catalog
        assert catalog.get("Fireball") is not None
        assert catalog.get("Frost") is None

    def test_duplicates_keep_first(self) -> None:
        """Test the first record wins when names collide."""
        catalog = Catalog(
            [
                SpellRecord(name="Bless", level="1"),
                SpellRecord(name="Bless", level="5"),
            ]
        )

        assert len(catalog) == 1
        assert catalog.get("Bless").level == "1"  # type: ignore[union-attr]

    def test_class_options(self, catalog: Catalog) -> None:
        assert catalog.class_options() == [
            "Bard",
            "Cleric",
            "Paladin",
            "Sorcerer",
            "Warlock",
            "Wizard",
        ]

    def test_level_options(self, catalog: Catalog) -> None:
        """Test labels are ordered by numeric level, unknown last."""
        assert catalog.level_options() == [
            "Cantrip",
            "cantrip",
            "1",
            "1st-level",
            "2",
            "3",
            "9",
            "Ritual",
        ]

    def test_from_records_invalid(self) -> None:
        """Test an invalid record raises CatalogError with its index."""
        with pytest.raises(CatalogError) as exc_info:
            Catalog.from_records([{"name": "Bless"}, {"level": "1"}], source="test")

        assert "index 1" in exc_info.value.message
        assert exc_info.value.details["source"] == "test"
        assert exc_info.value.details["errors"]

    def test_repr(self, catalog: Catalog) -> None:
        assert repr(catalog) == "Catalog(spells=8)"


class TestLoadCatalog:
    """Tests for load_catalog."""

    def test_bundled_catalog(self) -> None:
        """Test the packaged sample catalog loads."""
        catalog = load_catalog()

        assert len(catalog) == 13
        assert "Fireball" in catalog
        assert catalog.class_options()[:2] == ["Bard", "Cleric"]

    def test_bundled_synonyms_normalized(self) -> None:
        catalog = load_catalog()
        fire_bolt = catalog.get("Fire Bolt")

        assert fire_bolt is not None
        assert fire_bolt.attack_save == "Ranged spell attack"
        assert fire_bolt.damage_effect == "1d10 fire"

    def test_from_file(self, catalog_file: Path) -> None:
        catalog = load_catalog(catalog_file)
        assert catalog.names[0] == "Light"

    def test_wrapped_object(self, tmp_path: Path, sample_spell_data: list[dict[str, Any]]) -> None:
        """Test a {"spells": [...]} document is accepted."""
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"spells": sample_spell_data}), encoding="utf-8")

        assert len(load_catalog(path)) == 8

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError) as exc_info:
            load_catalog(tmp_path / "missing.json")

        assert exc_info.value.details["source"].endswith("missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)

    @pytest.mark.parametrize("payload", ['{"items": []}', '"spells"', "42"])
    def test_wrong_shape(self, tmp_path: Path, payload: str) -> None:
        """Test documents without a spell array are rejected."""
        path = tmp_path / "shape.json"
        path.write_text(payload, encoding="utf-8")

        with pytest.raises(CatalogError, match="JSON array"):
            load_catalog(path)
