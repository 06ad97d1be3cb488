"""Engine results → API response models."""

from __future__ import annotations

from packing.engine.analysis import AnalysisResult
from packing.engine.configuration import Configuration
from packing.models.responses import (
    AnalysisResponse,
    ConfigurationModel,
    ConstraintModel,
    GraphValidationModel,
    HessianModel,
    PerimeterModel,
)


def configuration_to_model(config: Configuration) -> ConfigurationModel:
    return ConfigurationModel(
        n=config.n,
        positions=[tuple(p) for p in config.positions.tolist()],
        radii=config.radii.tolist(),
        contacts=list(config.contacts),
        lattice_contacts=list(config.lattice_contacts),
        lattice_shifts=[tuple(s) for s in config.lattice_shifts.tolist()],
    )


def analysis_to_response(
    result: AnalysisResult,
    name: str | None = None,
    processing_time_ms: float = 0.0,
) -> AnalysisResponse:
    validation = result.graph_validation
    constraints = result.constraints
    perimeter = result.perimeter
    hessian = result.hessian

    return AnalysisResponse(
        name=name,
        configuration=configuration_to_model(result.configuration),
        graph_validation=GraphValidationModel(
            is_valid=validation.is_valid,
            expected_edges=validation.expected_edges,
            actual_edges=validation.actual_edges,
            message=validation.message,
        ),
        constraints=ConstraintModel(
            contact_matrix=constraints.contact_matrix.tolist(),
            rolling_matrix=constraints.rolling_matrix.tolist(),
            dimension=constraints.dimension,
            null_space_residual=constraints.null_space_residual,
        ),
        perimeter=PerimeterModel(
            perimeter=perimeter.perimeter,
            perimeter_of_centers=perimeter.perimeter_of_centers,
            gradient=perimeter.gradient.tolist(),
            hull=list(perimeter.hull),
            collinear=perimeter.collinear,
        ),
        hessian=HessianModel(
            hessian=hessian.hessian.tolist(),
            eigenvalues=hessian.eigenvalues.tolist(),
            eigenvectors=hessian.eigenvectors.tolist(),
            is_local_minimum=hessian.is_local_minimum,
            morse_index=hessian.morse_index,
            multipliers=hessian.multipliers.tolist(),
            multiplier_residual=hessian.multiplier_residual,
            nonfinite_entries=hessian.nonfinite_entries,
        ),
        projected_gradient=result.projected_gradient.tolist(),
        is_critical=result.is_critical,
        summary=result.summary,
        processing_time_ms=round(processing_time_ms, 1),
    )
