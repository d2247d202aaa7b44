"""Tests for the HTTP API."""

import pytest
from starlette.testclient import TestClient

from lockin_scorer.server import create_app


@pytest.fixture
def client(engine) -> TestClient:
    return TestClient(create_app(engine))


class TestCalculateEndpoint:
    """Tests for POST /calculate."""

    def test_weighted_assessment(self, client, weighted_inputs):
        response = client.post("/calculate", json=weighted_inputs)

        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 65
        assert body["range"] == [52, 78]
        assert body["stage"] == "Scaling"
        assert body["interventionWindow"] == "Act Soon"
        assert body["timeUntilLockin"] == "Passed"
        assert body["historicalMatch"]["year"] == 1950
        assert body["keyMetrics"]["advocacyOrgs"] == 60
        assert body["message"] == "Current score 65 (52-78) indicates Scaling phase with Act Soon window"
        assert body["dimensions"] == weighted_inputs
        assert body["strategy"] == "weighted-7"

    def test_lock_in_dimensions(self, client):
        ratings = {
            "regulatoryCapture": 50, "infrastructureHardening": 50, "supplyChainStandardization": 50,
            "corporateConsolidation": 50, "pathDependency": 50, "aiAutomationEmbedding": 50,
            "internationalExpansion": 50, "slaughterInertia": 50, "breedingLockIn": 50,
        }
        response = client.post("/calculate", json=ratings)

        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 50
        assert body["strategy"] == "equal-weight-9"
        assert "range" not in body
        assert body["historicalMatch"]["year"] == 1945

    def test_strategy_query_parameter(self, client):
        response = client.post("/calculate?strategy=equal-weight-9", json={})
        assert response.status_code == 200
        assert response.json()["score"] == 0

    def test_empty_object_uses_defaults(self, client):
        response = client.post("/calculate", json={})
        assert response.status_code == 200
        assert response.json()["score"] == 10

    def test_invalid_json(self, client):
        response = client.post(
            "/calculate",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be valid JSON"}

    def test_oversized_integer_literal(self, client):
        body = b'{"animals": ' + b"9" * 5000 + b"}"
        response = client.post("/calculate", content=body, headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "Request body must be valid JSON"}

    def test_empty_body(self, client):
        response = client.post("/calculate", content=b"")
        assert response.status_code == 400

    def test_non_object_body(self, client):
        response = client.post("/calculate", json=[10, 20])
        assert response.status_code == 400
        assert "JSON object" in response.json()["error"]

    def test_mixed_schemas(self, client):
        response = client.post("/calculate", json={"animals": 10, "breedingLockIn": 10})
        assert response.status_code == 400
        assert "more than one schema" in response.json()["error"]

    def test_non_numeric_value(self, client):
        response = client.post("/calculate", json={"animals": "many"})
        assert response.status_code == 400
        assert response.json()["error"] == "Dimension 'animals' must be a number, got 'many'"

    def test_unknown_strategy(self, client):
        response = client.post("/calculate?strategy=median", json={})
        assert response.status_code == 400

    def test_unexpected_failure(self, client, engine, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(engine, "assess", explode)
        response = client.post("/calculate", json={"animals": 10})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_get_not_allowed(self, client):
        assert client.get("/calculate").status_code == 405


class TestTrajectoryEndpoint:
    """Tests for GET /trajectory."""

    def test_defaults(self, client):
        response = client.get("/trajectory")

        assert response.status_code == 200
        body = response.json()
        assert body["technology"] == "Factory farming – battery cage egg production"
        assert len(body["trajectory"]) == 9
        assert body["trajectory"][0]["year"] == 1923

    def test_specific_trajectory(self, client):
        response = client.get("/trajectory", params={"tech": "aiShrimp", "species": "shrimp"})
        assert response.status_code == 200
        assert [p["score"] for p in response.json()["trajectory"]] == [15, 22, 30, 36, 42]

    def test_unknown_species(self, client):
        response = client.get("/trajectory?species=unicorns")

        assert response.status_code == 404
        assert response.json() == {"error": "Species data not found for unicorns"}

    def test_unknown_technology(self, client):
        response = client.get("/trajectory?species=chickens&tech=hoverCoops")

        assert response.status_code == 404
        assert response.json() == {"error": "Trajectory data not found for hoverCoops in chickens"}

    def test_technology_from_other_species(self, client):
        response = client.get("/trajectory?tech=insectFarming")
        assert response.status_code == 404
        assert response.json() == {"error": "Trajectory data not found for insectFarming in chickens"}


class TestAuxiliaryEndpoints:
    """Tests for the index, presets and health endpoints."""

    def test_trajectories_index(self, client):
        body = client.get("/trajectories").json()
        assert set(body) == {"chickens", "insects", "shrimp", "wildlife"}
        assert "factoryFarming" in body["chickens"]

    def test_presets(self, client):
        body = client.get("/presets").json()
        assert len(body) == 11
        assert body[0]["name"] == "Insect Farming 2024"
        assert body[0]["strategy"] == "equal-weight-9"
        assert body[0]["values"]["corporateConsolidation"] == 75

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_cors_headers(self, client):
        response = client.get("/health", headers={"Origin": "http://dashboard.example"})
        assert response.headers["access-control-allow-origin"] == "*"
