"""Shared test fixtures."""

from __future__ import annotations

import math

import pytest

from packing.catalog import Catalog
from packing.engine.configuration import Configuration, create_configuration

SQRT3 = math.sqrt(3.0)

# Three mutually touching unit disks
TRIANGLE_POSITIONS = [(0.0, 0.0), (2.0, 0.0), (1.0, SQRT3)]
TRIANGLE_CONTACTS = [(0, 1), (1, 2), (0, 2)]

# Two touching unit disks on the x-axis
PAIR_POSITIONS = [(-1.0, 0.0), (1.0, 0.0)]
PAIR_CONTACTS = [(0, 1)]

# Straight chain of three: bending it shortens the perimeter
CHAIN_POSITIONS = [(-2.0, 0.0), (0.0, 0.0), (2.0, 0.0)]
CHAIN_CONTACTS = [(0, 1), (1, 2)]

# Two touching equilateral triangles
RHOMBUS_POSITIONS = [(0.0, 0.0), (2.0, 0.0), (1.0, SQRT3), (3.0, SQRT3)]
RHOMBUS_CONTACTS = [(0, 1), (0, 2), (1, 2), (1, 3), (2, 3)]

# Generic convex quadrilateral, no contacts
QUAD_POSITIONS = [(0.0, 0.0), (3.0, 0.2), (2.5, 2.7), (-0.3, 2.0)]


@pytest.fixture
def triangle() -> Configuration:
    return create_configuration(TRIANGLE_POSITIONS, TRIANGLE_CONTACTS)


@pytest.fixture
def pair() -> Configuration:
    return create_configuration(PAIR_POSITIONS, PAIR_CONTACTS)


@pytest.fixture
def chain() -> Configuration:
    return create_configuration(CHAIN_POSITIONS, CHAIN_CONTACTS)


@pytest.fixture
def rhombus() -> Configuration:
    return create_configuration(RHOMBUS_POSITIONS, RHOMBUS_CONTACTS)


@pytest.fixture
def quad() -> Configuration:
    return create_configuration(QUAD_POSITIONS, [])


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    return Catalog.from_directory()
