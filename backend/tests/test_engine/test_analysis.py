"""Tests for the analysis orchestrator."""

import math

import numpy as np
import pytest

from packing.engine import hessian as hessian_module
from packing.engine import perimeter as perimeter_module
from packing.engine.analysis import analyze_configuration, is_critical_point
from packing.engine.configuration import create_configuration
from packing.engine.errors import GeometryError


def test_triangle_analysis(triangle):
    result = analyze_configuration(triangle)
    assert result.graph_validation.is_valid
    assert result.constraints.dimension == 3
    assert result.perimeter.perimeter == pytest.approx(6.0 + 2 * math.pi)
    assert result.perimeter_of_centers == pytest.approx(6.0)
    assert result.hessian.morse_index == 0
    assert result.hessian.is_local_minimum
    assert result.is_critical
    assert result.projected_gradient.shape == (3,)


def test_triangle_summary(triangle):
    summary = analyze_configuration(triangle).summary
    lines = summary.split("\n")
    assert lines[0] == "Configuration: 3 disks, 3 contacts"
    assert lines[1] == "Graph valid: True - Valid graph (3 edges, expected 7 for rigidity)"
    assert lines[2] == "Rolling space dimension: 3"
    assert lines[3] == "  Rigid: Yes"
    assert lines[4] == "Perimeter (disks): 12.283185"
    assert lines[5] == "Critical point: Yes"
    assert lines[6] == "Eigenvalues of intrinsic Hessian:"
    assert lines[7] == "  λ_0: 0.000000e+00"
    assert lines[-2] == "Morse index: 0"
    assert lines[-1] == "Local minimum: Yes"


def test_pair_analysis(pair):
    result = analyze_configuration(pair)
    assert result.perimeter.perimeter == pytest.approx(4.0 + 2 * math.pi)
    assert result.perimeter.collinear
    assert result.hessian.is_local_minimum
    assert result.is_critical


def test_chain_is_a_critical_saddle(chain):
    result = analyze_configuration(chain)
    assert result.constraints.dimension == 4
    assert result.is_critical
    assert result.hessian.morse_index == 1
    assert not result.hessian.is_local_minimum
    assert "  Rigid: No" in result.summary
    assert "Local minimum: No" in result.summary


def test_non_critical_configuration():
    # Loose disks: the perimeter can shrink by moving them together
    config = create_configuration([(0, 0), (5, 0), (0, 5)], [])
    result = analyze_configuration(config)
    assert not result.graph_validation.is_valid
    assert not result.is_critical
    assert "Critical point: No" in result.summary


def test_invalid_graph_is_reported_not_raised():
    config = create_configuration([(0, 0), (2, 0), (10, 0), (12, 0)], [(0, 1), (2, 3)])
    result = analyze_configuration(config)
    assert result.graph_validation.message == "Graph is not connected"


def test_coincident_contact_aborts_analysis():
    config = create_configuration([(0, 0), (0, 0), (2, 0)], [(0, 1), (1, 2)])
    with pytest.raises(GeometryError):
        analyze_configuration(config)


def test_is_critical_point_with_empty_rolling_space():
    assert is_critical_point(np.ones(4), np.zeros((4, 0)))


def test_analysis_is_idempotent(rhombus):
    first = analyze_configuration(rhombus)
    second = analyze_configuration(rhombus)
    assert first.summary == second.summary
    assert np.array_equal(first.constraints.contact_matrix, second.constraints.contact_matrix)
    assert np.array_equal(first.constraints.rolling_matrix, second.constraints.rolling_matrix)
    assert np.array_equal(first.perimeter.gradient, second.perimeter.gradient)
    assert np.array_equal(first.hessian.hessian, second.hessian.hessian)
    assert np.array_equal(first.hessian.eigenvalues, second.hessian.eigenvalues)
    assert np.array_equal(first.hessian.eigenvectors, second.hessian.eigenvectors)
    assert first.hessian.morse_index == second.hessian.morse_index


def test_catalog_entries_are_critical(catalog):
    for name in catalog:
        result = analyze_configuration(catalog.get(name))
        assert result.graph_validation.is_valid, name
        assert result.is_critical, name


def test_catalog_classification(catalog):
    assert analyze_configuration(catalog.get("D3-2")).hessian.morse_index == 1
    rhombus = analyze_configuration(catalog.get("D4-1"))
    assert rhombus.constraints.dimension == 3
    assert rhombus.hessian.is_local_minimum


def test_hull_computed_once_per_analysis(quad, monkeypatch):
    calls = []
    hull_fn = perimeter_module.convex_hull_indices
    collinear_fn = perimeter_module.is_collinear

    def counting_hull(points, epsilon):
        calls.append("hull")
        return hull_fn(points, epsilon)

    def counting_collinear(points, tolerance):
        calls.append("collinear")
        return collinear_fn(points, tolerance)

    for module in (perimeter_module, hessian_module):
        monkeypatch.setattr(module, "convex_hull_indices", counting_hull)
        monkeypatch.setattr(module, "is_collinear", counting_collinear)

    result = analyze_configuration(quad)
    assert calls.count("hull") == 1
    assert calls.count("collinear") == 1
    assert sorted(result.perimeter.hull) == [0, 1, 2, 3]
