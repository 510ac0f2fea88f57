"""FastAPI routes for the Processing domain."""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from processing.api.schemas import (
    PerfumeListResponse,
    PerfumeResponse,
    ProduceRequest,
    ProductionResponse,
    ProductionRunResponse,
)
from processing.domain import processing
from processing.production.orchestrator import ProductionOrchestrator, ProductionRequest
from processing.production.perfume import Perfume
from processing.production.run import ProductionRun
from shared.internal_auth import require_internal_key

# ---------------------------------------------------------------------------
# Production Runs Router
# ---------------------------------------------------------------------------
processing_router = APIRouter(
    prefix="/processing",
    tags=["processing"],
    dependencies=[Depends(require_internal_key)],
)


@processing_router.post("/runs", status_code=201, response_model=ProductionResponse)
def produce(body: ProduceRequest) -> ProductionResponse:
    """Run a production request end to end.

    Blocking calls to the cultivation service happen here, so this route is
    synchronous and runs in the worker thread pool.
    """
    request = ProductionRequest(
        product_name=body.product_name,
        category=body.category,
        bottle_count=body.bottle_count,
        bottle_volume=body.bottle_volume,
        idempotency_key=body.idempotency_key,
    )
    with processing.domain_context():
        perfumes = ProductionOrchestrator().produce(request)
    return ProductionResponse(
        perfumes=[PerfumeResponse(**perfume) for perfume in perfumes],
        count=len(perfumes),
    )


@processing_router.get("/runs/{run_id}", response_model=ProductionRunResponse)
async def get_run(run_id: str) -> ProductionRunResponse:
    run = current_domain.repository_for(ProductionRun).get(run_id)
    return ProductionRunResponse(**run.to_dict())


# ---------------------------------------------------------------------------
# Perfumes Router
# ---------------------------------------------------------------------------
perfume_router = APIRouter(
    prefix="/perfumes",
    tags=["perfumes"],
    dependencies=[Depends(require_internal_key)],
)


@perfume_router.get("", response_model=PerfumeListResponse)
async def latest_perfumes(
    category: Literal["parfum", "cologne"],
    count: int = Query(default=10, ge=1, le=500),
) -> PerfumeListResponse:
    """Most recently bottled perfumes of a category, newest first."""
    perfumes = current_domain.repository_for(Perfume).latest_in_category(category, count)
    return PerfumeListResponse(perfumes=[PerfumeResponse(**perfume.to_dict()) for perfume in perfumes])
