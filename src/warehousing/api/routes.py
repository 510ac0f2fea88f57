"""FastAPI routes for the Warehousing domain: warehouses, intake and dispatch."""

import json

from fastapi import APIRouter, Depends, Header
from protean.utils.globals import current_domain

from shared.internal_auth import require_internal_key
from warehousing.api.schemas import (
    CreateWarehouseRequest,
    DispatchRequest,
    DispatchResponse,
    IntakeRequest,
    PackageResponse,
    WarehouseListResponse,
    WarehouseResponse,
)
from warehousing.domain import warehousing
from warehousing.package.dispatch import PackageDispatcher
from warehousing.package.intake import ReceivePackage
from warehousing.package.strategy import DEFAULT_ROLE
from warehousing.warehouse.management import CreateWarehouse
from warehousing.warehouse.warehouse import Warehouse


def _package_response(package: dict) -> PackageResponse:
    return PackageResponse(**{**package, "perfume_ids": json.loads(package.get("perfume_ids") or "[]")})


def _warehouse_response(warehouse: Warehouse) -> WarehouseResponse:
    return WarehouseResponse(**warehouse.to_dict(), free_slots=warehouse.free_slots)


# ---------------------------------------------------------------------------
# Warehouse Router
# ---------------------------------------------------------------------------
warehouse_router = APIRouter(
    prefix="/warehouses",
    tags=["warehouses"],
    dependencies=[Depends(require_internal_key)],
)


@warehouse_router.post("", status_code=201, response_model=WarehouseResponse)
async def create_warehouse(body: CreateWarehouseRequest) -> WarehouseResponse:
    command = CreateWarehouse(
        label=body.label,
        location=body.location,
        capacity=body.capacity,
    )
    warehouse_id = current_domain.process(command, asynchronous=False)
    warehouse = current_domain.repository_for(Warehouse).get(warehouse_id)
    return _warehouse_response(warehouse)


@warehouse_router.get("", response_model=WarehouseListResponse)
async def list_warehouses() -> WarehouseListResponse:
    warehouses = current_domain.repository_for(Warehouse).all_by_creation()
    return WarehouseListResponse(warehouses=[_warehouse_response(w) for w in warehouses])


@warehouse_router.post("/{warehouse_id}/intake", status_code=201, response_model=PackageResponse)
async def intake(warehouse_id: str, body: IntakeRequest) -> PackageResponse:
    """Store a new package, refusing it when the warehouse is full."""
    command = ReceivePackage(
        warehouse_id=warehouse_id,
        label=body.label,
        sender_address=body.sender_address,
        perfume_ids=json.dumps(body.perfume_ids),
    )
    result = current_domain.process(command, asynchronous=False)
    return _package_response(result)


# ---------------------------------------------------------------------------
# Dispatch Router
# ---------------------------------------------------------------------------
dispatch_router = APIRouter(
    prefix="/dispatch",
    tags=["dispatch"],
    dependencies=[Depends(require_internal_key)],
)


@dispatch_router.post("", response_model=DispatchResponse)
def dispatch(body: DispatchRequest, x_role: str = Header(default=DEFAULT_ROLE)) -> DispatchResponse:
    """Deliver stored packages in batches paced by the caller's role.

    The inter-batch waits block, so this route is synchronous and runs in
    the worker thread pool.
    """
    with warehousing.domain_context():
        result = PackageDispatcher().dispatch(body.requested_quantity, x_role)
    return DispatchResponse(
        role=result.role,
        dispatched_count=result.dispatched_count,
        packages=[_package_response(package) for package in result.packages],
    )
