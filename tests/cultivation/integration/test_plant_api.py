"""Integration tests for the internal plant API via TestClient."""

import pytest
from cultivation.api.routes import plant_router
from cultivation.plant.plant import Plant
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from shared.api import register_error_handlers


@pytest.fixture()
def client(internal_headers):
    app = FastAPI()
    app.include_router(plant_router)
    register_error_handlers(app)
    return TestClient(app, headers=internal_headers)


def _create_plant(client, **overrides):
    defaults = {
        "name": "Lavender",
        "taxonomic_name": "Lavandula angustifolia",
        "origin": "Provence",
        "potency": 3.0,
    }
    defaults.update(overrides)
    response = client.post("/plants", json=defaults)
    assert response.status_code == 201
    return response.json()


class TestInternalAuth:
    def test_missing_key_rejected(self, client):
        response = client.get("/plants/available-count", params={"name": "Lavender"}, headers={"x-internal-key": ""})
        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized internal request"

    def test_wrong_key_rejected(self, client):
        response = client.post(
            "/plants",
            json={"name": "Lavender", "taxonomic_name": "Lavandula", "origin": "Provence"},
            headers={"x-internal-key": "wrong"},
        )
        assert response.status_code == 401
        assert current_domain.repository_for(Plant).count_available("Lavender") == 0


class TestCreatePlantEndpoint:
    def test_create_plant(self, client):
        body = _create_plant(client)
        assert body["status"] == "Planted"
        assert body["potency"] == 3.0

    def test_random_potency(self, client):
        body = _create_plant(client, potency=None)
        assert 1.0 <= body["potency"] <= 5.0

    @pytest.mark.parametrize("field,value", [("name", "L"), ("taxonomic_name", "L"), ("origin", "P"), ("potency", 5.5)])
    def test_invalid_input(self, client, field, value):
        payload = {"name": "Lavender", "taxonomic_name": "Lavandula", "origin": "Provence", field: value}
        response = client.post("/plants", json=payload)
        assert response.status_code == 422


class TestAvailableCountEndpoint:
    def test_counts_planted(self, client):
        _create_plant(client)
        _create_plant(client)
        response = client.get("/plants/available-count", params={"name": "Lavender"})
        assert response.status_code == 200
        assert response.json() == {"name": "Lavender", "available": 2}


class TestBatchEndpoint:
    def test_plants_batch(self, client):
        response = client.post(
            "/plants/batch",
            json={"name": "Rose", "taxonomic_name": "Rosa", "origin": "Bulgaria", "count": 4},
        )
        assert response.status_code == 201
        assert len(response.json()["plants"]) == 4


class TestHarvestEndpoint:
    def test_harvest(self, client):
        created = _create_plant(client, potency=2.5)
        response = client.post("/plants/harvest", json={"name": "Lavender", "count": 1})
        assert response.status_code == 200
        assert response.json() == {"harvested_units": [{"id": created["id"], "potency": 2.5}]}

    def test_insufficient_stock_is_conflict(self, client):
        _create_plant(client)
        response = client.post("/plants/harvest", json={"name": "Lavender", "count": 2})
        assert response.status_code == 409
        assert response.json()["code"] == "insufficient_stock"


class TestReservationEndpoints:
    def test_reserve_and_release(self, client):
        _create_plant(client)
        response = client.post("/plants/reservations", json={"name": "Lavender", "count": 1, "reservation_id": "r-1"})
        assert response.status_code == 201
        assert len(response.json()["plant_ids"]) == 1
        assert client.get("/plants/available-count", params={"name": "Lavender"}).json()["available"] == 0

        response = client.delete("/plants/reservations/r-1")
        assert response.status_code == 200
        assert response.json() == {"reservation_id": "r-1", "released": 1}
        assert client.get("/plants/available-count", params={"name": "Lavender"}).json()["available"] == 1


class TestPotencyEndpoint:
    def test_adjust(self, client):
        created = _create_plant(client, potency=4.65)
        response = client.patch(f"/plants/{created['id']}/potency", json={"percent": 65})
        assert response.status_code == 200
        assert response.json()["potency"] == 3.02

    def test_unknown_plant(self, client):
        response = client.patch("/plants/missing/potency", json={"percent": 50})
        assert response.status_code == 404

    @pytest.mark.parametrize("percent", [0, -10, 101])
    def test_percent_outside_rule(self, client, percent):
        created = _create_plant(client)
        response = client.patch(f"/plants/{created['id']}/potency", json={"percent": percent})
        assert response.status_code == 422


class TestListAndGetEndpoints:
    def test_list_with_search_and_sort(self, client):
        _create_plant(client, name="Rose", taxonomic_name="Rosa damascena", potency=2.0)
        _create_plant(client, name="Iris", taxonomic_name="Iris pallida", potency=4.0)
        response = client.get("/plants", params={"sort_by": "potency", "order": "desc"})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [p["name"] for p in body["plants"]] == ["Iris", "Rose"]

        response = client.get("/plants", params={"search": "damascena"})
        assert [p["name"] for p in response.json()["plants"]] == ["Rose"]

    def test_list_defaults_to_newest_first(self, client):
        first = _create_plant(client, name="Rose")
        second = _create_plant(client, name="Iris")
        response = client.get("/plants")
        assert [p["id"] for p in response.json()["plants"]] == [second["id"], first["id"]]

        response = client.get("/plants", params={"order": "asc"})
        assert [p["id"] for p in response.json()["plants"]] == [first["id"], second["id"]]

    def test_get_plant(self, client):
        created = _create_plant(client)
        response = client.get(f"/plants/{created['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_get_unknown_plant(self, client):
        response = client.get("/plants/missing")
        assert response.status_code == 404
