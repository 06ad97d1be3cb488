"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from packing import __version__


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    configurations_loaded: int = 0


class ConfigurationListResponse(BaseModel):
    names: list[str] = Field(default_factory=list)


class CatalogStatsResponse(BaseModel):
    total: int = 0
    by_size: dict[int, int] = Field(default_factory=dict)


class ConfigurationModel(BaseModel):
    n: int
    positions: list[tuple[float, float]]
    radii: list[float]
    contacts: list[tuple[int, int]] = Field(default_factory=list)
    lattice_contacts: list[tuple[int, int]] = Field(default_factory=list)
    lattice_shifts: list[tuple[float, float]] = Field(default_factory=list)


class GraphValidationModel(BaseModel):
    is_valid: bool
    expected_edges: int
    actual_edges: int
    message: str


class ConstraintModel(BaseModel):
    contact_matrix: list[list[float]] = Field(default_factory=list)
    rolling_matrix: list[list[float]] = Field(default_factory=list)
    dimension: int = 0
    null_space_residual: float = 0.0


class PerimeterModel(BaseModel):
    perimeter: float
    perimeter_of_centers: float
    gradient: list[float] = Field(default_factory=list)
    hull: list[int] = Field(default_factory=list)
    collinear: bool = False


class HessianModel(BaseModel):
    hessian: list[list[float]] = Field(default_factory=list)
    eigenvalues: list[float] = Field(default_factory=list)
    eigenvectors: list[list[float]] = Field(default_factory=list)
    is_local_minimum: bool = True
    morse_index: int = 0
    multipliers: list[float] = Field(default_factory=list)
    multiplier_residual: float = 0.0
    nonfinite_entries: int = 0


class AnalysisResponse(BaseModel):
    name: str | None = None
    configuration: ConfigurationModel
    graph_validation: GraphValidationModel
    constraints: ConstraintModel
    perimeter: PerimeterModel
    hessian: HessianModel
    projected_gradient: list[float] = Field(default_factory=list)
    is_critical: bool = True
    summary: str = ""
    processing_time_ms: float = 0.0
