"""Configuration model — disk centres, radii and the contact graph.

A Configuration is built once and never mutated: positions are stored as a
read-only (n, 2) array and contacts as a tuple of index pairs. Graph problems
(out-of-range indices, loops, duplicates) are accepted here and reported
by the graph validator.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from packing.engine.config import DEFAULT_CONFIG
from packing.engine.errors import ConfigurationError

logger = logging.getLogger(__name__)

Point = tuple[float, float]
Contact = tuple[int, int]


def _readonly(arr: NDArray[np.float64]) -> NDArray[np.float64]:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Configuration:
    """n congruent disks with a contact graph (plus optional lattice contacts)."""

    positions: NDArray[np.float64]
    radii: NDArray[np.float64]
    contacts: tuple[Contact, ...] = ()
    lattice_contacts: tuple[Contact, ...] = ()
    lattice_shifts: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))

    def __post_init__(self) -> None:
        positions = np.array(self.positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 2:
            raise ConfigurationError(
                f"Positions must be a sequence of 2D points, got shape {positions.shape}"
            )
        n = positions.shape[0]
        if n < 1:
            raise ConfigurationError("A configuration needs at least one disk")
        if not np.all(np.isfinite(positions)):
            raise ConfigurationError("Positions contain non-finite coordinates")

        radii = np.array(self.radii, dtype=np.float64).reshape(-1)
        if radii.shape[0] != n:
            raise ConfigurationError(f"Expected {n} radii, got {radii.shape[0]}")
        if not np.all(np.isfinite(radii)) or np.any(radii <= 0):
            raise ConfigurationError("Radii must be positive finite numbers")

        shifts = np.array(self.lattice_shifts, dtype=np.float64).reshape(-1, 2)
        lattice_contacts = _as_contacts(self.lattice_contacts)
        if shifts.shape[0] != len(lattice_contacts):
            raise ConfigurationError(
                f"Expected one lattice shift per lattice contact: "
                f"{len(lattice_contacts)} contacts, {shifts.shape[0]} shifts"
            )

        object.__setattr__(self, "positions", _readonly(positions))
        object.__setattr__(self, "radii", _readonly(radii))
        object.__setattr__(self, "contacts", _as_contacts(self.contacts))
        object.__setattr__(self, "lattice_contacts", lattice_contacts)
        object.__setattr__(self, "lattice_shifts", _readonly(shifts))

    @property
    def n(self) -> int:
        return int(self.positions.shape[0])

    @property
    def radius(self) -> float:
        """The common radius (the analysis assumes congruent disks)."""
        return float(self.radii[0])

    @property
    def flat_positions(self) -> NDArray[np.float64]:
        """Centres flattened as [x0, y0, x1, y1, ...]."""
        return self.positions.reshape(-1).copy()

    @property
    def all_contacts(self) -> tuple[Contact, ...]:
        return self.contacts + self.lattice_contacts


def _as_contacts(pairs: Iterable[Sequence[int]]) -> tuple[Contact, ...]:
    out: list[Contact] = []
    for pair in pairs:
        if len(pair) != 2:
            raise ConfigurationError(f"Contact must be a pair of indices, got {pair!r}")
        out.append((int(pair[0]), int(pair[1])))
    return tuple(out)


def create_configuration(
    positions: Sequence[Sequence[float]],
    contacts: Iterable[Sequence[int]],
    radius: float = 1.0,
    lattice_contacts: Iterable[Sequence[int]] = (),
    lattice_shifts: Sequence[Sequence[float]] = (),
) -> Configuration:
    """Build a uniform-radius configuration."""
    n = len(positions)
    return Configuration(
        positions=np.asarray(positions, dtype=np.float64),
        radii=np.full(n, radius, dtype=np.float64),
        contacts=tuple(contacts),
        lattice_contacts=tuple(lattice_contacts),
        lattice_shifts=np.asarray(lattice_shifts, dtype=np.float64).reshape(-1, 2),
    )


# ── Distance helpers ──


def wrap_to_fundamental_domain(p: Sequence[float]) -> Point:
    """Wrap a point into the fundamental domain [-1/2, 1/2]^2 of the unit torus."""
    return (p[0] - round(p[0]), p[1] - round(p[1]))


def torus_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Minimum-image distance on the flat unit torus."""
    wx, wy = wrap_to_fundamental_domain((a[0] - b[0], a[1] - b[1]))
    return math.hypot(wx, wy)


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def validate_contacts(
    config: Configuration,
    tolerance: float = 1e-6,
    use_torus: bool = False,
) -> tuple[bool, list[str]]:
    """Check every contact sits at distance r_i + r_j.

    Returns (valid, errors) where errors lists one message per offending contact.
    """
    errors: list[str] = []
    dist_fn = torus_distance if use_torus else euclidean_distance
    n = config.n

    for i, j in config.contacts:
        if not (0 <= i < n and 0 <= j < n):
            errors.append(f"Contact ({i},{j}): index out of range [0, {n - 1}]")
            continue
        expected = float(config.radii[i] + config.radii[j])
        actual = dist_fn(config.positions[i], config.positions[j])
        if abs(actual - expected) > tolerance:
            errors.append(
                f"Contact ({i},{j}): distance {actual:.8f} != expected {expected:.8f}"
            )

    if errors:
        logger.debug("Contact distance check: %d problems", len(errors))
    return (len(errors) == 0, errors)


def compute_degrees(config: Configuration) -> list[int]:
    """Contact count per disk, lattice contacts included. Indices must be in range."""
    degrees = [0] * config.n
    for i, j in config.all_contacts:
        degrees[i] += 1
        degrees[j] += 1
    return degrees


def contact_direction(
    config: Configuration,
    i: int,
    j: int,
    use_torus: bool = False,
    tolerance: float = DEFAULT_CONFIG.coincident_tolerance,
) -> Point:
    """Unit vector from disk i to disk j; (0, 0) when the centres are closer than tolerance."""
    dx = float(config.positions[j][0] - config.positions[i][0])
    dy = float(config.positions[j][1] - config.positions[i][1])
    if use_torus:
        dx, dy = wrap_to_fundamental_domain((dx, dy))
    dist = math.hypot(dx, dy)
    if dist < tolerance:
        return (0.0, 0.0)
    return (dx / dist, dy / dist)
