"""Variational analysis of rigid disk packings."""

from packing.engine.analysis import AnalysisResult, analyze_configuration
from packing.engine.config import AnalysisConfig
from packing.engine.configuration import Configuration, create_configuration
from packing.engine.constraints import ConstraintData, compute_constraints
from packing.engine.errors import ConfigurationError, GeometryError, PackingError
from packing.engine.graph import GraphValidation, check_graph_validity
from packing.engine.hessian import HessianResult, compute_hessian
from packing.engine.perimeter import PerimeterResult, compute_perimeter

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "Configuration",
    "ConfigurationError",
    "ConstraintData",
    "GeometryError",
    "GraphValidation",
    "HessianResult",
    "PackingError",
    "PerimeterResult",
    "analyze_configuration",
    "check_graph_validity",
    "compute_constraints",
    "compute_hessian",
    "compute_perimeter",
    "create_configuration",
]
