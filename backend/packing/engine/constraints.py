"""Contact Jacobian and rolling space.

Each contact (i, j) contributes one row of A(c) ∈ R^{m×2n}:

    row = [..., -u_ij (cols 2i, 2i+1), ..., +u_ij (cols 2j, 2j+1), ...]

with u_ij the unit vector from centre i to centre j. The row is the gradient
of |c_j − c_i| and does not depend on the order of the pair.

The rolling space ker(A) is read off the eigen-decomposition of the square
PSD matrix AᵗA: eigenvectors with (near-)zero eigenvalue span the kernel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from packing.engine.config import DEFAULT_CONFIG, AnalysisConfig
from packing.engine.configuration import Configuration, contact_direction
from packing.engine.errors import ConfigurationError, GeometryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ConstraintData:
    contact_matrix: NDArray[np.float64]  # A, (m × 2n)
    rolling_matrix: NDArray[np.float64]  # Z, (2n × d)
    dimension: int
    null_space_residual: float = 0.0  # max|A·Z|


def build_contact_matrix(
    config: Configuration,
    settings: AnalysisConfig = DEFAULT_CONFIG,
) -> NDArray[np.float64]:
    """Contact constraint Jacobian A(c). Raises GeometryError on coincident centres."""
    n = config.n
    A = np.zeros((len(config.contacts), 2 * n))

    for row, (i, j) in enumerate(config.contacts):
        if not (0 <= i < n and 0 <= j < n):
            raise ConfigurationError(f"Contact ({i}, {j}) references a disk outside [0, {n - 1}]")
        u = contact_direction(config, i, j, tolerance=settings.coincident_tolerance)
        if u == (0.0, 0.0):
            raise GeometryError(f"Disks {i} and {j} have coincident centers")
        A[row, 2 * i : 2 * i + 2] = np.negative(u)
        A[row, 2 * j : 2 * j + 2] = u

    return A


def rolling_space_basis(
    A: NDArray[np.float64],
    dim: int,
    tolerance: float = DEFAULT_CONFIG.null_space_tolerance,
) -> NDArray[np.float64]:
    """Orthonormal basis of ker(A) as the columns of a (dim × d) matrix.

    With no contacts every direction is free and the basis spans R^dim.
    """
    A = np.asarray(A, dtype=np.float64).reshape(-1, dim)
    AtA = A.T @ A
    eigenvalues, V = np.linalg.eigh(AtA)

    null_idx = np.flatnonzero(np.abs(eigenvalues) < tolerance)
    logger.debug(
        "AᵗA eigenvalues: %s; null space dim = %d",
        np.array2string(eigenvalues, precision=8),
        len(null_idx),
    )

    if len(null_idx) == 0:
        logger.debug("No null space: configuration is fully rigid")
        return np.zeros((dim, 0))

    return V[:, null_idx]


def compute_constraints(
    config: Configuration,
    settings: AnalysisConfig = DEFAULT_CONFIG,
) -> ConstraintData:
    A = build_contact_matrix(config, settings)
    Z = rolling_space_basis(A, 2 * config.n, settings.null_space_tolerance)

    residual = float(np.max(np.abs(A @ Z))) if A.size and Z.size else 0.0
    logger.debug("A is %dx%d, Z is %dx%d, max|A·Z| = %.4e", *A.shape, *Z.shape, residual)

    return ConstraintData(
        contact_matrix=A,
        rolling_matrix=Z,
        dimension=int(Z.shape[1]),
        null_space_residual=residual,
    )
