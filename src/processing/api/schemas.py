"""Pydantic request/response schemas for the Processing API."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class ProduceRequest(BaseModel):
    product_name: str = Field(min_length=2, max_length=100)
    category: Literal["parfum", "cologne"]
    bottle_count: int = Field(ge=1)
    bottle_volume: Literal[150, 250]
    idempotency_key: str | None = Field(default=None, min_length=1, max_length=255)


class PerfumeResponse(BaseModel):
    id: str
    name: str
    category: str
    volume_ml: int
    serial_number: str
    plant_id: str
    run_id: str | None = None
    expires_at: datetime
    created_at: datetime


class ProductionResponse(BaseModel):
    perfumes: list[PerfumeResponse]
    count: int


class PerfumeListResponse(BaseModel):
    perfumes: list[PerfumeResponse]


class ProductionRunResponse(BaseModel):
    id: str
    idempotency_key: str
    product_name: str
    category: str
    bottle_count: int
    bottle_volume: int
    units_needed: int
    status: str
    reservation_id: str | None = None
    replenished: int = 0
    failure_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
