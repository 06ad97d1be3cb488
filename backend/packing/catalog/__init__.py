"""Named configuration catalog."""

from packing.catalog.errors import CatalogError, ConfigurationNotFoundError, ExpressionError
from packing.catalog.expression import evaluate_coordinate, evaluate_expression
from packing.catalog.loader import DEFAULT_DATA_DIR, Catalog

__all__ = [
    "DEFAULT_DATA_DIR",
    "Catalog",
    "CatalogError",
    "ConfigurationNotFoundError",
    "ExpressionError",
    "evaluate_coordinate",
    "evaluate_expression",
]
