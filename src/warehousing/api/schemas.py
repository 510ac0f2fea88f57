"""Pydantic request/response schemas for the Warehousing API."""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateWarehouseRequest(BaseModel):
    label: str = Field(min_length=1, max_length=80)
    location: str = Field(min_length=1, max_length=120)
    capacity: int = Field(gt=0)


class IntakeRequest(BaseModel):
    label: str = Field(min_length=1, max_length=80)
    sender_address: str = Field(min_length=1, max_length=120)
    perfume_ids: list[str] = Field(default_factory=list)


class DispatchRequest(BaseModel):
    requested_quantity: int


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class WarehouseResponse(BaseModel):
    id: str
    label: str
    location: str
    capacity: int
    stored_count: int = 0
    free_slots: int


class WarehouseListResponse(BaseModel):
    warehouses: list[WarehouseResponse]


class PackageResponse(BaseModel):
    id: str
    label: str
    sender_address: str
    perfume_ids: list[str]
    status: str
    warehouse_id: str | None = None
    stored_at: datetime | None = None
    delivered_at: datetime | None = None


class DispatchResponse(BaseModel):
    role: str
    dispatched_count: int
    packages: list[PackageResponse]
