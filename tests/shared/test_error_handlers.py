"""Tests for the HTTP mapping of the shared error taxonomy."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.api import CAPACITY_EXCEEDED, INSUFFICIENT_STOCK, RPC_TRANSPORT, register_error_handlers
from shared.exceptions import CapacityExceededError, InsufficientStockError, RpcTransportError

_ERRORS = {
    "stock": InsufficientStockError({"count": ["Not enough planted plants"]}),
    "capacity": CapacityExceededError({"warehouse_id": ["Warehouse is full"]}),
    "invalid": ValidationError({"name": ["is required"]}),
    "missing": ObjectNotFoundError("Plant not found"),
    "transport": RpcTransportError("harvest", "timed out"),
}


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/raise/{kind}")
    def raise_error(kind: str):
        raise _ERRORS[kind]

    return TestClient(app, raise_server_exceptions=False)


class TestErrorMapping:
    def test_insufficient_stock_is_conflict(self, client):
        response = client.get("/raise/stock")
        assert response.status_code == 409
        assert response.json()["code"] == INSUFFICIENT_STOCK

    def test_capacity_exceeded_is_conflict(self, client):
        response = client.get("/raise/capacity")
        assert response.status_code == 409
        assert response.json() == {"code": CAPACITY_EXCEEDED, "error": {"warehouse_id": ["Warehouse is full"]}}

    def test_validation_error_is_bad_request(self, client):
        assert client.get("/raise/invalid").status_code == 400

    def test_missing_object_is_not_found(self, client):
        assert client.get("/raise/missing").status_code == 404

    def test_transport_failure_is_bad_gateway(self, client):
        response = client.get("/raise/transport")
        assert response.status_code == 502
        assert response.json() == {"code": RPC_TRANSPORT, "detail": "harvest failed: timed out"}
