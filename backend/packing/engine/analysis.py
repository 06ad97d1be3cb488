"""Analysis orchestrator — from graph checks through to the text summary.

Each call builds its own matrices from one Configuration; nothing is cached
between calls.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from packing.engine.config import DEFAULT_CONFIG, AnalysisConfig
from packing.engine.configuration import Configuration
from packing.engine.constraints import ConstraintData, compute_constraints
from packing.engine.graph import GraphValidation, check_graph_validity
from packing.engine.hessian import HessianResult, compute_hessian
from packing.engine.perimeter import PerimeterResult, compute_perimeter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class AnalysisResult:
    configuration: Configuration
    graph_validation: GraphValidation
    constraints: ConstraintData
    perimeter: PerimeterResult
    hessian: HessianResult
    projected_gradient: NDArray[np.float64]
    is_critical: bool
    summary: str

    @property
    def perimeter_of_centers(self) -> float:
        return self.perimeter.perimeter_of_centers


def is_critical_point(
    gradient: NDArray[np.float64],
    rolling: NDArray[np.float64],
    tolerance: float = DEFAULT_CONFIG.critical_tolerance,
) -> bool:
    """True when Zᵗ·∇P vanishes. An empty rolling space is trivially critical."""
    if rolling.size == 0:
        return True
    return bool(np.all(np.abs(rolling.T @ gradient) < tolerance))


def generate_summary(
    configuration: Configuration,
    graph_validation: GraphValidation,
    constraints: ConstraintData,
    perimeter: PerimeterResult,
    hessian: HessianResult,
    settings: AnalysisConfig = DEFAULT_CONFIG,
) -> str:
    rigid = constraints.dimension <= settings.rigid_dimension_hint
    critical = is_critical_point(
        perimeter.gradient, constraints.rolling_matrix, settings.critical_tolerance
    )

    lines = [
        f"Configuration: {configuration.n} disks, {len(configuration.contacts)} contacts",
        f"Graph valid: {graph_validation.is_valid} - {graph_validation.message}",
        f"Rolling space dimension: {constraints.dimension}",
        f"  Rigid: {'Yes' if rigid else 'No'}",
        f"Perimeter (disks): {perimeter.perimeter:.6f}",
        f"Critical point: {'Yes' if critical else 'No'}",
        "Eigenvalues of intrinsic Hessian:",
    ]
    for i, value in enumerate(hessian.eigenvalues):
        lines.append(f"  λ_{i}: {value:.6e}")
    lines.append(f"Morse index: {hessian.morse_index}")
    lines.append(f"Local minimum: {'Yes' if hessian.is_local_minimum else 'No'}")

    return "\n".join(lines)


def analyze_configuration(
    config: Configuration,
    settings: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Run the full analysis of one configuration.

    Graph problems are reported in ``graph_validation``; geometric failures
    (coincident contact centres) raise GeometryError and abort this call only.
    """
    settings = settings or DEFAULT_CONFIG
    start = time.perf_counter()

    t0 = time.perf_counter()
    validation = check_graph_validity(config, settings)
    logger.debug("  graph validation in %.1fms: %s", (time.perf_counter() - t0) * 1000, validation.message)

    t0 = time.perf_counter()
    constraints = compute_constraints(config, settings)
    logger.debug("  constraints in %.1fms (dim %d)", (time.perf_counter() - t0) * 1000, constraints.dimension)

    t0 = time.perf_counter()
    perimeter = compute_perimeter(config, settings)
    logger.debug("  perimeter in %.1fms", (time.perf_counter() - t0) * 1000)

    t0 = time.perf_counter()
    hessian = compute_hessian(
        config,
        constraints.rolling_matrix,
        settings,
        contact_matrix=constraints.contact_matrix,
        perimeter=perimeter,
    )
    logger.debug("  hessian in %.1fms", (time.perf_counter() - t0) * 1000)

    Z = constraints.rolling_matrix
    projected = Z.T @ perimeter.gradient if Z.size else np.zeros(0)
    summary = generate_summary(config, validation, constraints, perimeter, hessian, settings)

    logger.info(
        "Analysis complete: n=%d, dim=%d, Morse index %d in %.0fms",
        config.n,
        constraints.dimension,
        hessian.morse_index,
        (time.perf_counter() - start) * 1000,
    )

    return AnalysisResult(
        configuration=config,
        graph_validation=validation,
        constraints=constraints,
        perimeter=perimeter,
        hessian=hessian,
        projected_gradient=projected,
        is_critical=is_critical_point(perimeter.gradient, Z, settings.critical_tolerance),
        summary=summary,
    )
