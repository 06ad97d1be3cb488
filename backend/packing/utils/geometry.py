"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def cross(o: NDArray[np.float64], a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    """z-component of (a - o) × (b - o). Positive = left turn."""
    return float((a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0]))


def unit_direction(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
) -> tuple[NDArray[np.float64], float]:
    """Unit vector from a to b and the distance between them.

    The vector is zero when the points coincide exactly.
    """
    d = np.asarray(b, dtype=np.float64) - np.asarray(a, dtype=np.float64)
    dist = float(np.hypot(d[0], d[1]))
    if dist == 0.0:
        return np.zeros(2), 0.0
    return d / dist, dist


def normal_projector(u: NDArray[np.float64]) -> NDArray[np.float64]:
    """2×2 projector I − u·uᵗ onto the normal of unit vector u."""
    return np.eye(2) - np.outer(u, u)


def add_block(
    H: NDArray[np.float64],
    block: NDArray[np.float64],
    row: int,
    col: int,
    sign: float = 1.0,
) -> None:
    """Add sign·block into the 2×2 block of H at disk indices (row, col)."""
    H[2 * row : 2 * row + 2, 2 * col : 2 * col + 2] += sign * block


def add_edge_stencil(H: NDArray[np.float64], block: NDArray[np.float64], i: int, j: int) -> None:
    """+block on the (i,i), (j,j) blocks and −block on (i,j), (j,i)."""
    add_block(H, block, i, i, 1.0)
    add_block(H, block, j, j, 1.0)
    add_block(H, block, i, j, -1.0)
    add_block(H, block, j, i, -1.0)
