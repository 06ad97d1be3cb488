"""Tests for the configuration catalog."""

import json
import math

import pytest

from packing.catalog import Catalog, CatalogError, ConfigurationNotFoundError
from packing.catalog.loader import load_file
from packing.engine.configuration import create_configuration, validate_contacts


def _write(path, graphs, radius="1"):
    payload = {"version": "1.0", "indexing": "0-based", "angles": "degrees", "radius": radius, "graphs": graphs}
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_bundled_catalog_names(catalog):
    assert catalog.names() == [
        "D3-1", "D3-2",
        "D4-1", "D4-2", "D4-3",
        "D5-1", "D5-2",
        "D6-1", "D6-2",
    ]
    assert len(catalog) == 9
    assert "D5-2" in catalog
    assert "D9-1" not in catalog


def test_names_by_size(catalog):
    assert catalog.names_by_size(4) == ["D4-1", "D4-2", "D4-3"]
    assert catalog.names_by_size(7) == []


def test_stats(catalog):
    total, by_size = catalog.stats()
    assert total == 9
    assert by_size == {3: 2, 4: 3, 5: 2, 6: 2}


def test_expression_coordinates_are_evaluated(catalog):
    triangle = catalog.get("D3-1")
    assert triangle.positions[2].tolist() == pytest.approx([1.0, math.sqrt(3)])
    assert triangle.radius == 1.0


def test_bundled_contacts_touch(catalog):
    for name in catalog:
        valid, errors = validate_contacts(catalog.get(name))
        assert valid, (name, errors)


def test_unknown_name_lists_available(catalog):
    with pytest.raises(ConfigurationNotFoundError) as excinfo:
        catalog.get("D9-9")
    err = excinfo.value
    assert err.name == "D9-9"
    assert err.available == catalog.names()
    assert str(err).startswith('Configuration "D9-9" not found. Available: D3-1, D3-2')
    assert isinstance(err, KeyError)


def test_catalog_is_read_only(catalog):
    with pytest.raises(TypeError):
        catalog._entries["D1-1"] = create_configuration([(0, 0)], [])


def test_load_file_names_entries(tmp_path):
    path = _write(tmp_path / "2disks.json", [
        {"discos": 2, "centros": [[-1, 0], [1, 0]], "contactos": [[0, 1]]},
        {"discos": 2, "centros": [[0, "-1"], [0, "1"]], "contactos": [[0, 1]]},
    ], radius=1)
    entries = load_file(path)
    assert list(entries) == ["D2-1", "D2-2"]
    assert entries["D2-2"].positions.tolist() == [[0.0, -1.0], [0.0, 1.0]]


def test_from_directory_ignores_other_files(tmp_path):
    _write(tmp_path / "2disks.json", [{"discos": 1, "centros": [[0, 0]], "contactos": []}])
    (tmp_path / "notes.txt").write_text("not a catalog")
    catalog = Catalog.from_directory(tmp_path)
    assert catalog.names() == ["D2-1"]


def test_disk_count_mismatch(tmp_path):
    path = _write(tmp_path / "3disks.json", [{"discos": 3, "centros": [[0, 0], [2, 0]], "contactos": []}])
    with pytest.raises(CatalogError, match="D3-1"):
        load_file(path)


def test_bad_expression_names_entry(tmp_path):
    path = _write(tmp_path / "2disks.json", [{"discos": 2, "centros": [[0, 0], ["evil()", 0]], "contactos": []}])
    with pytest.raises(CatalogError, match="D2-1"):
        load_file(path)


def test_malformed_json(tmp_path):
    path = tmp_path / "2disks.json"
    path.write_text("{ not json")
    with pytest.raises(CatalogError):
        load_file(path)


def test_bad_file_name(tmp_path):
    path = _write(tmp_path / "disks.json", [])
    with pytest.raises(CatalogError):
        load_file(path)


def test_missing_directory(tmp_path):
    with pytest.raises(CatalogError):
        Catalog.from_directory(tmp_path / "nowhere")
