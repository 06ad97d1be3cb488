"""Engine exceptions. Validation problems are returned as data, not raised."""

from __future__ import annotations


class PackingError(ValueError):
    """Base class for every failure raised by the packing package."""


class ConfigurationError(PackingError):
    """A configuration cannot be built from the given values."""


class GeometryError(PackingError):
    """The geometry prevents a computation (e.g. coincident contact centres)."""
