"""Convex hull of the centres, perimeter of the disk union and its gradient.

The boundary of the union of congruent disks of radius r around a convex
arrangement is the hull of the centres offset outwards by r, so

    perimeter(disks) = perimeter(hull of centres) + 2πr.

Collinear arrangements collapse the hull to a segment traversed twice
("stadium" shape): the centre perimeter is 2 × the segment length.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import pdist

from packing.engine.config import DEFAULT_CONFIG, AnalysisConfig
from packing.engine.configuration import Configuration
from packing.utils.geometry import cross, unit_direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PerimeterResult:
    perimeter: float
    gradient: NDArray[np.float64]  # length 2n, zero off the hull
    perimeter_of_centers: float = 0.0
    hull: tuple[int, ...] = ()
    collinear: bool = False


def convex_hull_indices(
    points: NDArray[np.float64],
    epsilon: float = DEFAULT_CONFIG.hull_epsilon,
) -> list[int]:
    """Andrew's monotone chain. Returns hull indices in CCW order.

    Only strict right turns (cross < -epsilon) are popped, so points lying on
    a hull edge are kept. Duplicated indices are removed, first occurrence wins.
    """
    pts = np.asarray(points, dtype=np.float64)
    n = len(pts)
    if n <= 1:
        return list(range(n))

    order = sorted(range(n), key=lambda i: (pts[i, 0], pts[i, 1]))

    lower: list[int] = []
    for i in order:
        while len(lower) >= 2 and cross(pts[lower[-2]], pts[lower[-1]], pts[i]) < -epsilon:
            lower.pop()
        lower.append(i)

    upper: list[int] = []
    for i in reversed(order):
        while len(upper) >= 2 and cross(pts[upper[-2]], pts[upper[-1]], pts[i]) < -epsilon:
            upper.pop()
        upper.append(i)

    # Last point of each chain is the first of the other
    return list(dict.fromkeys(lower[:-1] + upper[:-1]))


def is_collinear(
    points: NDArray[np.float64],
    tolerance: float = DEFAULT_CONFIG.collinear_tolerance,
) -> bool:
    """True when the centred point cloud has rank ≤ 1 (second singular value tiny)."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 3:
        return True
    centered = pts - pts.mean(axis=0)
    s = np.linalg.svd(centered, compute_uv=False)
    return bool(s[1] < tolerance)


def extremal_pair(points: NDArray[np.float64], hull: list[int]) -> tuple[int, int, float]:
    """The two hull points farthest apart, and their distance.

    Ties resolve to the first pair in (i < j) hull order.
    """
    if len(hull) < 2:
        idx = hull[0] if hull else 0
        return idx, idx, 0.0
    dists = pdist(np.asarray(points, dtype=np.float64)[hull])
    k = int(np.argmax(dists))
    # Invert the condensed index k → (a, b) with a < b
    m = len(hull)
    a = 0
    while k >= m - 1 - a:
        k -= m - 1 - a
        a += 1
    b = a + 1 + k
    return hull[a], hull[b], float(dists.max())


def _hull_and_collinearity(
    config: Configuration,
    settings: AnalysisConfig,
    hull: Sequence[int] | None,
    collinear: bool | None,
) -> tuple[list[int], bool]:
    pts = config.positions
    if hull is None:
        hull = convex_hull_indices(pts, settings.hull_epsilon)
    if collinear is None:
        collinear = is_collinear(pts, settings.collinear_tolerance)
    return list(hull), collinear


def perimeter_of_centers(
    config: Configuration,
    settings: AnalysisConfig = DEFAULT_CONFIG,
    *,
    hull: Sequence[int] | None = None,
    collinear: bool | None = None,
) -> float:
    """Perimeter of the hull of the centres. A precomputed hull and collinearity flag are reused."""
    pts = config.positions
    hull, collinear = _hull_and_collinearity(config, settings, hull, collinear)
    if len(hull) <= 1:
        return 0.0

    if collinear:
        return 2.0 * extremal_pair(pts, hull)[2]

    perimeter = 0.0
    for k, i in enumerate(hull):
        j = hull[(k + 1) % len(hull)]
        perimeter += math.hypot(pts[j, 0] - pts[i, 0], pts[j, 1] - pts[i, 1])
    return perimeter


def perimeter_of_disks(
    config: Configuration,
    settings: AnalysisConfig = DEFAULT_CONFIG,
) -> float:
    return perimeter_of_centers(config, settings) + 2.0 * math.pi * config.radius


def perimeter_gradient(
    config: Configuration,
    settings: AnalysisConfig = DEFAULT_CONFIG,
    *,
    hull: Sequence[int] | None = None,
    collinear: bool | None = None,
) -> NDArray[np.float64]:
    """∂(perimeter)/∂(centres), flattened to length 2n."""
    pts = config.positions
    grad = np.zeros(2 * config.n)
    hull, collinear = _hull_and_collinearity(config, settings, hull, collinear)
    if len(hull) <= 1:
        return grad

    if collinear:
        a, b, dist = extremal_pair(pts, hull)
        if dist < settings.coincident_tolerance:
            return grad
        u, _ = unit_direction(pts[a], pts[b])
        grad[2 * a : 2 * a + 2] -= 2.0 * u
        grad[2 * b : 2 * b + 2] += 2.0 * u
        return grad

    for k, i in enumerate(hull):
        j = hull[(k + 1) % len(hull)]
        u, dist = unit_direction(pts[i], pts[j])
        if dist < settings.coincident_tolerance:
            continue
        grad[2 * i : 2 * i + 2] -= u
        grad[2 * j : 2 * j + 2] += u

    return grad


def compute_perimeter(
    config: Configuration,
    settings: AnalysisConfig = DEFAULT_CONFIG,
) -> PerimeterResult:
    pts = config.positions
    hull = convex_hull_indices(pts, settings.hull_epsilon)
    collinear = is_collinear(pts, settings.collinear_tolerance)

    centers = perimeter_of_centers(config, settings, hull=hull, collinear=collinear)
    result = PerimeterResult(
        perimeter=centers + 2.0 * math.pi * config.radius,
        gradient=perimeter_gradient(config, settings, hull=hull, collinear=collinear),
        perimeter_of_centers=centers,
        hull=tuple(hull),
        collinear=collinear,
    )
    logger.debug(
        "Perimeter: %.8f (centres %.8f, hull %s)",
        result.perimeter,
        centers,
        hull,
    )
    return result
