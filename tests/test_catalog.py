import json
from pathlib import Path

import pytest

from src.core.catalog import build_catalog, entry_from_record, load_catalog_file
from src.core.errors import InvalidCatalog

ROOT = Path(__file__).resolve().parent.parent


def test_source_field_names_are_mapped() -> None:
    entry = entry_from_record({"name": "Godrick the Grafted", "short": "Godrick", "region": "Limgrave",
                               "type": "Demigod", "damage": "Fire", "Remembrance": True})
    assert entry.has_special_trait is True
    assert entry.alias == "Godrick"


@pytest.mark.parametrize("value,expected", [("yes", True), ("No", False), ("1", True), (0, False), (None, False)])
def test_boolean_coercion(value, expected) -> None:
    assert entry_from_record({"name": "X", "hasSpecialTrait": value}).has_special_trait is expected


def test_malformed_and_duplicate_records_skipped() -> None:
    catalog = build_catalog([
        {"name": "Margit, the Fell Omen"},
        {"region": "Nowhere"},
        "not a record",
        {"name": "margit the fell omen"},
        {"name": "Fire Giant"},
    ])
    assert [e.name for e in catalog] == ["Margit, the Fell Omen", "Fire Giant"]


def test_load_bundled_catalog() -> None:
    catalog = load_catalog_file(ROOT / "bosses.json")
    assert len(catalog) >= 10
    names = {e.name for e in catalog}
    assert "Malenia, Blade of Miquella" in names


def test_empty_catalog_file_is_invalid(tmp_path) -> None:
    path = tmp_path / "bosses.json"
    path.write_text(json.dumps([]), encoding="utf-8")
    with pytest.raises(InvalidCatalog):
        load_catalog_file(path)


def test_missing_catalog_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_catalog_file(tmp_path / "nope.json")
