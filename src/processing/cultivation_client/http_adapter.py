"""Cultivation client over the internal HTTP API.

Every request carries the shared secret in ``x-internal-key`` and uses a
fixed timeout. Nothing is retried. Error responses are mapped back to the
same exceptions the in-process client raises; transport failures become
``RpcTransportError``.
"""

import httpx
import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError

from processing.cultivation_client.port import CultivationClient, HarvestedUnit, PlantRecord
from shared.api import CAPACITY_EXCEEDED, INSUFFICIENT_STOCK
from shared.exceptions import (
    CapacityExceededError,
    InsufficientStockError,
    RpcTransportError,
    UnauthorizedInternalError,
)
from shared.internal_auth import INTERNAL_KEY_HEADER

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


def _record(plant: dict) -> PlantRecord:
    return PlantRecord(
        id=str(plant["id"]),
        name=plant["name"],
        potency=plant["potency"],
        status=plant["status"],
    )


def _messages(body: dict) -> dict:
    error = body.get("error", body.get("detail"))
    if isinstance(error, dict):
        return error
    return {"_entity": [str(error)]}


def _raise_for_error(operation: str, response: httpx.Response) -> None:
    if response.is_success:
        return

    try:
        body = response.json()
    except ValueError:
        body = {"detail": response.text}
    if not isinstance(body, dict):
        body = {"detail": body}

    status = response.status_code
    logger.error("cultivation_rpc_error", operation=operation, status=status, body=body)

    if status == 401:
        raise UnauthorizedInternalError(body.get("detail") or "Unauthorized internal request")
    if status == 404:
        raise ObjectNotFoundError(str(body.get("error", body.get("detail", "Not found"))))
    if status == 409 and body.get("code") == INSUFFICIENT_STOCK:
        raise InsufficientStockError(_messages(body))
    if status == 409 and body.get("code") == CAPACITY_EXCEEDED:
        raise CapacityExceededError(_messages(body))
    if status in (400, 409, 422):
        raise ValidationError(_messages(body))
    raise RpcTransportError(operation, f"HTTP {status}")


class HttpCultivationClient(CultivationClient):
    """Calls the cultivation service's internal routes with httpx."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)
        self._headers = {INTERNAL_KEY_HEADER: api_key}

    def _call(self, operation: str, method: str, path: str, **kwargs) -> dict:
        try:
            response = self._client.request(method, path, headers=self._headers, timeout=self.timeout, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("cultivation_rpc_transport_error", operation=operation, error=str(exc))
            raise RpcTransportError(operation, str(exc) or type(exc).__name__) from exc

        _raise_for_error(operation, response)
        return response.json()

    def available_count(self, name: str) -> int:
        body = self._call("available_count", "GET", "/plants/available-count", params={"name": name})
        return body["available"]

    def plant_units(self, name: str, taxonomic_name: str, origin: str, count: int) -> list[PlantRecord]:
        body = self._call(
            "plant_units",
            "POST",
            "/plants/batch",
            json={"name": name, "taxonomic_name": taxonomic_name, "origin": origin, "count": count},
        )
        return [_record(plant) for plant in body["plants"]]

    def reserve_units(self, name: str, count: int, reservation_id: str) -> list[str]:
        body = self._call(
            "reserve_units",
            "POST",
            "/plants/reservations",
            json={"name": name, "count": count, "reservation_id": reservation_id},
        )
        return body["plant_ids"]

    def release_reservation(self, reservation_id: str) -> int:
        body = self._call("release_reservation", "DELETE", f"/plants/reservations/{reservation_id}")
        return body["released"]

    def harvest(self, name: str, count: int, reservation_id: str | None = None) -> list[HarvestedUnit]:
        payload = {"name": name, "count": count}
        if reservation_id:
            payload["reservation_id"] = reservation_id
        body = self._call("harvest", "POST", "/plants/harvest", json=payload)
        return [HarvestedUnit(id=unit["id"], potency=unit["potency"]) for unit in body["harvested_units"]]

    def adjust_potency(self, plant_id: str, percent: float) -> PlantRecord:
        body = self._call("adjust_potency", "PATCH", f"/plants/{plant_id}/potency", json={"percent": percent})
        return _record(body)
