"""Engine configuration — numeric tolerances used by the analysis."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    """Thresholds for hull, constraint and spectrum computations."""

    # Convex hull: turns within this cross-product are kept (collinear points survive)
    hull_epsilon: float = 1e-12
    # Second singular value below this → all centres on one line
    collinear_tolerance: float = 1e-8
    # Centres closer than this are coincident
    coincident_tolerance: float = 1e-15

    # Eigenvalues of AᵗA below this span the rolling space
    null_space_tolerance: float = 1e-10
    # Singular values below rcond × max(s) are dropped from the pseudo-inverse
    lstsq_rcond: float = 1e-10

    # Spectrum
    eigenvalue_snap: float = 1e-10
    negative_threshold: float = 1e-6  # Morse index counts λ < -threshold

    # Projected gradient components below this → critical point
    critical_tolerance: float = 1e-8

    # Graph validation
    max_degree: int = 6  # kissing number in the plane

    # Summary hint: rolling dimension ≤ 3 means only rigid motions remain
    rigid_dimension_hint: int = 3


DEFAULT_CONFIG = AnalysisConfig()
