from __future__ import annotations

import json

import pytest

from recall_app.core.catalog import GROCERY_ITEMS, ItemCatalog
from recall_app.core.models import Item


def test_default_catalog_is_stable_and_unique():
    catalog = ItemCatalog.default()
    assert catalog.all_items() == GROCERY_ITEMS
    assert len({item.id for item in catalog}) == len(catalog)
    assert len(catalog) >= 24


def test_lookup_by_id():
    catalog = ItemCatalog.default()
    apples = catalog.get("1")
    assert apples is not None
    assert apples.name == "Apples"
    assert catalog.get("does-not-exist") is None


def test_duplicate_ids_are_rejected():
    with pytest.raises(ValueError):
        ItemCatalog([Item("1", "Apples", ""), Item("1", "Pears", "")])


def test_empty_catalog_is_rejected():
    with pytest.raises(ValueError):
        ItemCatalog([])


def test_load_from_json_file(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(
        json.dumps([{"id": "a", "name": "Apples", "image": "a.png"}, {"id": "b", "name": "Bread", "image": "b.png"}]),
        encoding="utf-8",
    )
    catalog = ItemCatalog.from_json_file(path)
    assert [item.name for item in catalog] == ["Apples", "Bread"]
    assert catalog.get("b").image_ref == "b.png"


def test_malformed_json_entry_is_rejected(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps([{"id": "a", "name": "Apples"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        ItemCatalog.from_json_file(path)
