"""Catalog exceptions."""

from __future__ import annotations

from packing.engine.errors import PackingError


class CatalogError(PackingError):
    """A catalog file or entry is malformed."""


class ExpressionError(CatalogError):
    """A coordinate expression is outside the supported grammar or fails to evaluate."""


class ConfigurationNotFoundError(CatalogError, KeyError):
    """No configuration with the requested name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f'Configuration "{name}" not found. Available: {", ".join(available)}')

    def __str__(self) -> str:
        return str(self.args[0])
