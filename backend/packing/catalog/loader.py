"""Catalog of named configurations, loaded from JSON files.

One file per disk count, named ``{k}disks.json``::

    {
      "version": "1.0", "indexing": "0-based", "angles": "degrees", "radius": "1",
      "graphs": [
        {"discos": 3, "centros": [[0, 0], [2, 0], [1, "sqrt(3)"]], "contactos": [[0, 1], ...]},
        ...
      ]
    }

Entry ``i`` (1-based) of ``{k}disks.json`` is named ``D{k}-{i}``. The catalog
is built once and read-only afterwards.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, Field, ValidationError

from packing.catalog.errors import CatalogError, ConfigurationNotFoundError
from packing.catalog.expression import evaluate_coordinate
from packing.engine.configuration import Configuration, create_configuration

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

_FILE_RE = re.compile(r"^(\d+)disks\.json$")
_NAME_RE = re.compile(r"^D(\d+)-(\d+)$")


class RawGraph(BaseModel):
    discos: int
    centros: list[tuple[str | float, str | float]]
    contactos: list[tuple[int, int]] = Field(default_factory=list)


class RawDataFile(BaseModel):
    version: str = ""
    indexing: str = "0-based"
    angles: str = "degrees"
    radius: str | float = 1.0
    graphs: list[RawGraph] = Field(default_factory=list)


def _name_key(name: str) -> tuple[int, int, str]:
    m = _NAME_RE.match(name)
    if m:
        return (int(m.group(1)), int(m.group(2)), name)
    return (0, 0, name)


def parse_graph(raw: RawGraph, radius: float) -> Configuration:
    """Evaluate coordinates of one catalog entry and build its Configuration."""
    if raw.discos != len(raw.centros):
        raise CatalogError(f"Entry declares {raw.discos} disks but lists {len(raw.centros)} centres")
    positions = [(evaluate_coordinate(x), evaluate_coordinate(y)) for x, y in raw.centros]
    return create_configuration(positions, raw.contactos, radius)


def load_file(path: Path) -> dict[str, Configuration]:
    """Parse one ``{k}disks.json`` file into ``{"D{k}-{i}": Configuration}``."""
    m = _FILE_RE.match(path.name)
    if not m:
        raise CatalogError(f"Catalog file name must look like '<k>disks.json', got {path.name}")
    disk_count = int(m.group(1))

    try:
        data = RawDataFile.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as e:
        raise CatalogError(f"Malformed catalog file {path.name}: {e}") from e

    radius = evaluate_coordinate(data.radius)
    entries: dict[str, Configuration] = {}
    for index, raw in enumerate(data.graphs, start=1):
        name = f"D{disk_count}-{index}"
        try:
            entries[name] = parse_graph(raw, radius)
        except CatalogError as e:
            raise CatalogError(f"{path.name} entry {name}: {e}") from e

    logger.debug("Loaded %d configurations from %s", len(entries), path.name)
    return entries


class Catalog:
    """Read-only lookup of named configurations."""

    def __init__(self, entries: Mapping[str, Configuration]) -> None:
        self._entries: Mapping[str, Configuration] = MappingProxyType(dict(entries))
        self._names: tuple[str, ...] = tuple(sorted(self._entries, key=_name_key))

    @classmethod
    def from_files(cls, paths: Iterable[Path]) -> Catalog:
        entries: dict[str, Configuration] = {}
        for path in paths:
            entries.update(load_file(Path(path)))
        return cls(entries)

    @classmethod
    def from_directory(cls, directory: Path | str | None = None) -> Catalog:
        """Load every ``{k}disks.json`` in a directory (the bundled data by default)."""
        root = Path(directory) if directory is not None else DEFAULT_DATA_DIR
        if not root.is_dir():
            raise CatalogError(f"Catalog directory not found: {root}")
        files = sorted(
            (p for p in root.iterdir() if _FILE_RE.match(p.name)),
            key=lambda p: int(_FILE_RE.match(p.name).group(1)),
        )
        catalog = cls.from_files(files)
        logger.info("Catalog ready: %d configurations from %s", len(catalog), root)
        return catalog

    def get(self, name: str) -> Configuration:
        try:
            return self._entries[name]
        except KeyError:
            raise ConfigurationNotFoundError(name, list(self._names)) from None

    def names(self) -> list[str]:
        return list(self._names)

    def names_by_size(self, size: int) -> list[str]:
        prefix = f"D{size}-"
        return [name for name in self._names if name.startswith(prefix)]

    def stats(self) -> tuple[int, dict[int, int]]:
        """(total, {disk count: number of configurations})."""
        by_size: dict[int, int] = {}
        for name in self._names:
            m = _NAME_RE.match(name)
            if m:
                size = int(m.group(1))
                by_size[size] = by_size.get(size, 0) + 1
        return len(self._names), by_size

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)
