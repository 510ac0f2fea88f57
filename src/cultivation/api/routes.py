"""FastAPI routes for the Cultivation domain: the internal plant API."""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from cultivation.api.schemas import (
    AdjustPotencyRequest,
    AvailableCountResponse,
    CreatePlantRequest,
    HarvestRequest,
    HarvestResponse,
    PlantBatchRequest,
    PlantBatchResponse,
    PlantListResponse,
    PlantResponse,
    ReleaseResponse,
    ReservationResponse,
    ReserveRequest,
    SortField,
)
from cultivation.plant.harvesting import HarvestUnits
from cultivation.plant.plant import Plant
from cultivation.plant.planting import PlantUnit, PlantUnits
from cultivation.plant.potency import AdjustPotency
from cultivation.plant.reservation import ReleaseReservation, ReserveUnits
from shared.internal_auth import require_internal_key

plant_router = APIRouter(
    prefix="/plants",
    tags=["plants"],
    dependencies=[Depends(require_internal_key)],
)


@plant_router.get("/available-count", response_model=AvailableCountResponse)
async def available_count(name: str = Query(min_length=1)) -> AvailableCountResponse:
    """Count planted, unreserved plants with the given name."""
    available = current_domain.repository_for(Plant).count_available(name)
    return AvailableCountResponse(name=name, available=available)


@plant_router.get("", response_model=PlantListResponse)
async def list_plants(
    search: str | None = None,
    status: Literal["Planted", "Harvested"] | None = None,
    sort_by: SortField = "planted_at",
    order: Literal["asc", "desc"] = "desc",
) -> PlantListResponse:
    plants = current_domain.repository_for(Plant).search(
        text=search,
        status=status,
        sort_by=sort_by,
        descending=order == "desc",
    )
    return PlantListResponse(
        plants=[PlantResponse(**plant.to_dict()) for plant in plants],
        total=len(plants),
    )


@plant_router.post("", status_code=201, response_model=PlantResponse)
async def create_plant(body: CreatePlantRequest) -> PlantResponse:
    command = PlantUnit(
        name=body.name,
        taxonomic_name=body.taxonomic_name,
        origin=body.origin,
        potency=body.potency,
    )
    result = current_domain.process(command, asynchronous=False)
    return PlantResponse(**result)


@plant_router.post("/batch", status_code=201, response_model=PlantBatchResponse)
async def plant_batch(body: PlantBatchRequest) -> PlantBatchResponse:
    """Plant several identical units in one atomic write."""
    command = PlantUnits(
        name=body.name,
        taxonomic_name=body.taxonomic_name,
        origin=body.origin,
        count=body.count,
    )
    result = current_domain.process(command, asynchronous=False)
    return PlantBatchResponse(plants=[PlantResponse(**plant) for plant in result])


@plant_router.post("/harvest", response_model=HarvestResponse)
async def harvest(body: HarvestRequest) -> HarvestResponse:
    command = HarvestUnits(
        name=body.name,
        count=body.count,
        reservation_id=body.reservation_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return HarvestResponse(harvested_units=result)


@plant_router.post("/reservations", status_code=201, response_model=ReservationResponse)
async def reserve(body: ReserveRequest) -> ReservationResponse:
    command = ReserveUnits(
        name=body.name,
        count=body.count,
        reservation_id=body.reservation_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return ReservationResponse(**result)


@plant_router.delete("/reservations/{reservation_id}", response_model=ReleaseResponse)
async def release_reservation(reservation_id: str) -> ReleaseResponse:
    command = ReleaseReservation(reservation_id=reservation_id)
    released = current_domain.process(command, asynchronous=False)
    return ReleaseResponse(reservation_id=reservation_id, released=released)


@plant_router.get("/{plant_id}", response_model=PlantResponse)
async def get_plant(plant_id: str) -> PlantResponse:
    plant = current_domain.repository_for(Plant).get(plant_id)
    return PlantResponse(**plant.to_dict())


@plant_router.patch("/{plant_id}/potency", response_model=PlantResponse)
async def adjust_potency(plant_id: str, body: AdjustPotencyRequest) -> PlantResponse:
    command = AdjustPotency(plant_id=plant_id, percent=body.percent)
    result = current_domain.process(command, asynchronous=False)
    return PlantResponse(**result)
