"""Pydantic request/response schemas for the Cultivation API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreatePlantRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    taxonomic_name: str = Field(min_length=2, max_length=150)
    origin: str = Field(min_length=2, max_length=100)
    potency: float | None = Field(default=None, ge=1.0, le=5.0)


class PlantBatchRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    taxonomic_name: str = Field(min_length=2, max_length=150)
    origin: str = Field(min_length=2, max_length=100)
    count: int = Field(ge=1)


class AdjustPotencyRequest(BaseModel):
    percent: float = Field(gt=0, le=100)


class HarvestRequest(BaseModel):
    name: str = Field(min_length=1)
    count: int = Field(ge=1)
    reservation_id: str | None = None


class ReserveRequest(BaseModel):
    name: str = Field(min_length=1)
    count: int = Field(ge=1)
    reservation_id: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PlantResponse(BaseModel):
    id: str
    name: str
    taxonomic_name: str
    origin: str
    potency: float
    status: str
    reservation_id: str | None = None
    planted_at: datetime | None = None
    harvested_at: datetime | None = None


class PlantBatchResponse(BaseModel):
    plants: list[PlantResponse]


class PlantListResponse(BaseModel):
    plants: list[PlantResponse]
    total: int


class AvailableCountResponse(BaseModel):
    name: str
    available: int


class HarvestedUnit(BaseModel):
    id: str
    potency: float


class HarvestResponse(BaseModel):
    harvested_units: list[HarvestedUnit]


class ReservationResponse(BaseModel):
    reservation_id: str
    plant_ids: list[str]


class ReleaseResponse(BaseModel):
    reservation_id: str
    released: int


SortField = Literal["planted_at", "potency", "name"]
