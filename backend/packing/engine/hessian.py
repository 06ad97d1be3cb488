"""Intrinsic Hessian of the perimeter on the contact-constraint manifold.

The ambient Hessian of the Lagrangian P(c) − Σ λ_k g_k(c) is

    H = H_E + H_G

where H_E is the second derivative of the hull perimeter of the centres and
H_G carries the curvature of the contact constraints g_k = |c_j − c_i|,
weighted by the Lagrange multipliers solving Aᵗλ = ∇P. Restricting H to the
rolling space Z gives H_roll = Zᵗ H Z, whose spectrum classifies the critical
point: the Morse index is the number of clearly negative eigenvalues.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from packing.engine.config import DEFAULT_CONFIG, AnalysisConfig
from packing.engine.configuration import Configuration
from packing.engine.constraints import build_contact_matrix
from packing.engine.perimeter import (
    PerimeterResult,
    compute_perimeter,
    convex_hull_indices,
    extremal_pair,
    is_collinear,
)
from packing.utils.geometry import add_edge_stencil, normal_projector, unit_direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class HessianResult:
    hessian: NDArray[np.float64]  # (d × d), restricted to the rolling space
    eigenvalues: NDArray[np.float64]  # ascending
    eigenvectors: NDArray[np.float64]  # columns follow eigenvalues
    is_local_minimum: bool
    morse_index: int
    multipliers: NDArray[np.float64] = field(default_factory=lambda: np.zeros(0))
    multiplier_residual: float = 0.0
    nonfinite_entries: int = 0


def _trivial_result() -> HessianResult:
    return HessianResult(
        hessian=np.zeros((0, 0)),
        eigenvalues=np.zeros(0),
        eigenvectors=np.zeros((0, 0)),
        is_local_minimum=True,
        morse_index=0,
    )


def build_euclidean_hessian(
    config: Configuration,
    settings: AnalysisConfig = DEFAULT_CONFIG,
    *,
    hull: Sequence[int] | None = None,
    collinear: bool | None = None,
) -> NDArray[np.float64]:
    """Second derivative of the centre-hull perimeter, (2n × 2n).

    Each hull edge (u, v) of length L and unit tangent t adds the block
    (I − t·tᵗ)/L with the +/+/−/− edge stencil. A collinear arrangement
    has one effective edge between its extremal points, counted twice.
    """
    pts = config.positions
    H = np.zeros((2 * config.n, 2 * config.n))
    if hull is None:
        hull = convex_hull_indices(pts, settings.hull_epsilon)
    hull = list(hull)
    if collinear is None:
        collinear = is_collinear(pts, settings.collinear_tolerance)

    if collinear:
        a, b, dist = extremal_pair(pts, hull)
        if dist > settings.coincident_tolerance:
            t, _ = unit_direction(pts[a], pts[b])
            add_edge_stencil(H, 2.0 * normal_projector(t) / dist, a, b)
        return H

    for k, u in enumerate(hull):
        v = hull[(k + 1) % len(hull)]
        t, dist = unit_direction(pts[u], pts[v])
        if dist < settings.coincident_tolerance:
            continue
        add_edge_stencil(H, normal_projector(t) / dist, u, v)

    return H


def solve_lagrange_multipliers(
    A: NDArray[np.float64],
    gradient: NDArray[np.float64],
    rcond: float = DEFAULT_CONFIG.lstsq_rcond,
) -> NDArray[np.float64]:
    """Least-squares solution of Aᵗλ = gradient via a truncated SVD of Aᵗ.

    Singular directions below rcond × max(s) are discarded so near-redundant
    contacts do not blow the multipliers up.
    """
    m = A.shape[0]
    if m == 0:
        return np.zeros(0)

    U, s, Vt = np.linalg.svd(A.T, full_matrices=False)
    cutoff = rcond * s.max()
    keep = s > cutoff
    coeffs = (U[:, keep].T @ gradient) / s[keep]
    return Vt[keep].T @ coeffs


def build_geometric_hessian(
    config: Configuration,
    multipliers: NDArray[np.float64],
    settings: AnalysisConfig = DEFAULT_CONFIG,
) -> NDArray[np.float64]:
    """Constraint curvature term: −(λ/2)(I − u·uᵗ) per contact.

    The 1/2 is the inverse contact distance 2r at unit radius.
    """
    pts = config.positions
    H = np.zeros((2 * config.n, 2 * config.n))

    for k, (i, j) in enumerate(config.contacts):
        u, dist = unit_direction(pts[i], pts[j])
        if dist < settings.coincident_tolerance:
            continue
        add_edge_stencil(H, -(multipliers[k] / 2.0) * normal_projector(u), i, j)

    return H


def project_to_roll(H: NDArray[np.float64], Z: NDArray[np.float64]) -> NDArray[np.float64]:
    """Zᵗ·H·Z."""
    return Z.T @ H @ Z


def intrinsic_spectrum(
    H: NDArray[np.float64],
    tolerance: float = DEFAULT_CONFIG.eigenvalue_snap,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Eigenvalues (ascending, |λ| < tolerance snapped to 0) and matching eigenvector columns."""
    sym = (H + H.T) / 2.0
    eigenvalues, eigenvectors = np.linalg.eigh(sym)
    eigenvalues = np.where(np.abs(eigenvalues) < tolerance, 0.0, eigenvalues)

    order = np.argsort(eigenvalues, kind="stable")
    return eigenvalues[order], eigenvectors[:, order]


def compute_hessian(
    config: Configuration,
    rolling: NDArray[np.float64],
    settings: AnalysisConfig = DEFAULT_CONFIG,
    *,
    contact_matrix: NDArray[np.float64] | None = None,
    perimeter: PerimeterResult | None = None,
) -> HessianResult:
    """Hessian of the disk perimeter restricted to the rolling space, and its classification.

    A and the perimeter result are recomputed unless supplied; the Euclidean
    term reuses the hull of the supplied perimeter result.
    """
    Z = np.asarray(rolling, dtype=np.float64).reshape(2 * config.n, -1)
    if Z.shape[1] == 0:
        logger.debug("Rolling space is empty (fully rigid); trivial Hessian")
        return _trivial_result()

    A = contact_matrix if contact_matrix is not None else build_contact_matrix(config, settings)
    if perimeter is None:
        perimeter = compute_perimeter(config, settings)
    grad = perimeter.gradient

    H_E = build_euclidean_hessian(
        config, settings, hull=perimeter.hull, collinear=perimeter.collinear
    )
    lambdas = solve_lagrange_multipliers(A, grad, settings.lstsq_rcond)
    residual = float(np.max(np.abs(A.T @ lambdas - grad))) if grad.size else 0.0
    logger.debug("Lagrange multipliers: %s (max|Aᵗλ − ∇P| = %.4e)", lambdas, residual)

    H_G = build_geometric_hessian(config, lambdas, settings)
    H_roll = project_to_roll(H_E + H_G, Z)

    bad = ~np.isfinite(H_roll)
    nonfinite = int(bad.sum())
    if nonfinite:
        logger.warning("Hessian has %d non-finite entries; clamping to 0", nonfinite)
        H_roll = np.where(bad, 0.0, H_roll)

    eigenvalues, eigenvectors = intrinsic_spectrum(H_roll, settings.eigenvalue_snap)
    morse_index = int(np.count_nonzero(eigenvalues < -settings.negative_threshold))
    logger.debug("Intrinsic eigenvalues: %s; Morse index %d", eigenvalues, morse_index)

    return HessianResult(
        hessian=H_roll,
        eigenvalues=eigenvalues,
        eigenvectors=eigenvectors,
        is_local_minimum=morse_index == 0,
        morse_index=morse_index,
        multipliers=lambdas,
        multiplier_residual=residual,
        nonfinite_entries=nonfinite,
    )
