"""Tests for the HTTP endpoints."""

from __future__ import annotations

import math

import pytest
from fastapi.testclient import TestClient

from packing import __version__
from packing.catalog import Catalog
from packing.main import create_app
from packing.models.responses import HealthResponse
from tests.conftest import CHAIN_CONTACTS, CHAIN_POSITIONS, PAIR_CONTACTS, PAIR_POSITIONS


@pytest.fixture(scope="module")
def client() -> TestClient:
    return TestClient(create_app())


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["configurations_loaded"] == 9
    assert data["version"] == __version__


def test_health_model_defaults_to_package_version():
    assert HealthResponse().version == __version__


def test_list_configurations(client):
    data = client.get("/api/configurations").json()
    assert data["names"][:2] == ["D3-1", "D3-2"]
    assert len(data["names"]) == 9

    data = client.get("/api/configurations", params={"size": 5}).json()
    assert data["names"] == ["D5-1", "D5-2"]


def test_catalog_stats(client):
    data = client.get("/api/configurations/stats").json()
    assert data["total"] == 9
    assert data["by_size"] == {"3": 2, "4": 3, "5": 2, "6": 2}


def test_get_configuration(client):
    response = client.get("/api/configurations/D3-1")
    assert response.status_code == 200
    data = response.json()
    assert data["n"] == 3
    assert data["contacts"] == [[0, 1], [1, 2], [0, 2]]
    assert data["positions"][2][1] == pytest.approx(math.sqrt(3))


def test_unknown_configuration_is_404(client):
    response = client.get("/api/configurations/D9-9")
    assert response.status_code == 404
    data = response.json()
    assert data["name"] == "D9-9"
    assert "D3-1" in data["available"]
    assert 'Configuration "D9-9" not found' in data["detail"]


def test_analyze_named_configuration(client):
    response = client.get("/api/configurations/D3-2/analysis")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "D3-2"
    assert data["hessian"]["morse_index"] == 1
    assert data["hessian"]["is_local_minimum"] is False
    assert data["constraints"]["dimension"] == 4
    assert data["is_critical"] is True
    assert "Morse index: 1" in data["summary"]


def test_analyze_pair(client):
    response = client.post("/api/analyze", json={"positions": PAIR_POSITIONS, "contacts": PAIR_CONTACTS})
    assert response.status_code == 200
    data = response.json()
    assert data["perimeter"]["perimeter"] == pytest.approx(4 + 2 * math.pi)
    assert data["perimeter"]["gradient"] == pytest.approx([-2.0, 0.0, 2.0, 0.0])
    assert data["perimeter"]["hull"] == [0, 1]
    assert data["constraints"]["contact_matrix"] == [[-1.0, 0.0, 1.0, 0.0]]
    assert data["graph_validation"]["is_valid"] is True
    assert data["processing_time_ms"] >= 0


def test_analyze_self_loop_is_422(client):
    payload = {"positions": CHAIN_POSITIONS, "contacts": CHAIN_CONTACTS + [[1, 1]]}
    response = client.post("/api/analyze", json=payload)
    # The self-loop has coincident "centres" so the Jacobian cannot be built
    assert response.status_code == 422
    assert "coincident" in response.json()["detail"]


def test_analyze_disconnected_graph_is_data(client):
    payload = {"positions": [[0, 0], [2, 0], [10, 0], [12, 0]], "contacts": [[0, 1], [2, 3]]}
    data = client.post("/api/analyze", json=payload).json()
    assert data["graph_validation"]["is_valid"] is False
    assert data["graph_validation"]["message"] == "Graph is not connected"


def test_analyze_rejects_empty_positions(client):
    response = client.post("/api/analyze", json={"positions": [], "contacts": []})
    assert response.status_code == 422


def test_injected_empty_catalog_is_used():
    empty = TestClient(create_app(Catalog({})))
    assert empty.get("/api/health").json()["configurations_loaded"] == 0
    assert empty.get("/api/configurations").json()["names"] == []
    assert empty.get("/api/configurations/D3-1").status_code == 404


def test_analyze_lattice_shift_mismatch_is_422(client):
    payload = {
        "positions": PAIR_POSITIONS,
        "contacts": PAIR_CONTACTS,
        "lattice_contacts": [[0, 1], [1, 0]],
        "lattice_shifts": [[4.0, 0.0]],
    }
    response = client.post("/api/analyze", json=payload)
    assert response.status_code == 422
    assert "lattice shift" in response.json()["detail"]
