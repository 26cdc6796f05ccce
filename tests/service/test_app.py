"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from hubgen.service import create_app
from tests._fixtures.contracts import YAML_CONTRACT


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_endpoint_returns_source(client: TestClient) -> None:
    response = client.post(
        "/generate",
        json={"contract": YAML_CONTRACT, "namespace": "Maps.Client", "class_name": "MapClient"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert "public partial class MapClient" in payload["source"]
    assert payload["declared_types"] == ["Coordinate", "Mode", "Coordinate[]", "Route"]
    assert payload["methods"] == ["Track", "Plan", "MovedOn", "ModeChangedOn"]


def test_generate_endpoint_skips_prior_declarations(client: TestClient) -> None:
    first = client.post(
        "/generate",
        json={"contract": YAML_CONTRACT, "namespace": "Maps.Client", "class_name": "MapClient"},
    ).json()

    response = client.post(
        "/generate",
        json={
            "contract": YAML_CONTRACT,
            "namespace": "Maps.Client",
            "class_name": "MapClient",
            "prior_source": first["source"],
        },
    )

    assert response.status_code == 200
    assert response.json()["declared_types"] == []


def test_generation_errors_map_to_bad_request(client: TestClient) -> None:
    response = client.post(
        "/generate",
        json={"contract": "hub:\n  name: H\n", "namespace": "N", "class_name": "C"},
    )

    assert response.status_code == 400
    assert "client API" in response.json()["detail"]


def test_contract_errors_map_to_bad_request(client: TestClient) -> None:
    response = client.post(
        "/generate",
        json={"contract": "- not a mapping\n", "namespace": "N", "class_name": "C"},
    )

    assert response.status_code == 400
    assert "mapping" in response.json()["detail"]


def test_missing_fields_are_rejected(client: TestClient) -> None:
    response = client.post("/generate", json={"contract": YAML_CONTRACT})

    assert response.status_code == 422
