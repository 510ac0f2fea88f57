"""Production orchestration: from a production request to bottled perfumes.

The orchestrator drives one ProductionRun through its states, calling the
cultivation service between steps:

1. open the run (or answer from an earlier run with the same key)
2. top up stock with one batched planting when availability falls short
3. reserve the units the run needs
4. harvest exactly the reserved units
5. normalize high-potency plants
6. assemble and commit the perfumes

A failure before the harvest releases the reservation and leaves the run
Compensated. A failure after it leaves the run Failed with the harvested
units recorded for reconciliation. The original error always propagates.
"""

import json
from dataclasses import dataclass
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError

from processing.cultivation_client import get_client
from processing.cultivation_client.port import CultivationClient, HarvestedUnit
from processing.domain import processing
from processing.production.allocation import needs_normalization, normalization_percent
from processing.production.assembly import AssembleProductionRun, CommitProductionRun
from processing.production.perfume import Perfume
from processing.production.progress import AbortProductionRun, RecordHarvest, RecordUnitsReserved
from processing.production.run import ProductionRun, ProductionRunStatus
from processing.production.starting import StartProductionRun

logger = structlog.get_logger(__name__)

# Origin recorded on plants planted to cover a shortfall
REPLENISHMENT_ORIGIN = "Replenishment"


@dataclass(frozen=True)
class ProductionRequest:
    product_name: str
    category: str
    bottle_count: int
    bottle_volume: int
    idempotency_key: str | None = None


class ProductionOrchestrator:
    def __init__(self, client: CultivationClient | None = None) -> None:
        self._client = client

    @property
    def client(self) -> CultivationClient:
        return self._client or get_client()

    # -------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------
    def produce(self, request: ProductionRequest) -> list[dict]:
        """Run a production request to completion and return its perfumes."""
        key = request.idempotency_key or str(uuid4())

        existing = processing.repository_for(ProductionRun).find_by_idempotency_key(key)
        if existing is not None:
            return self._replay(existing)

        run_id = processing.process(
            StartProductionRun(
                idempotency_key=key,
                product_name=request.product_name,
                category=request.category,
                bottle_count=request.bottle_count,
                bottle_volume=request.bottle_volume,
            ),
            asynchronous=False,
        )
        run = processing.repository_for(ProductionRun).get(run_id)

        try:
            reservation_id = self._reserve(run)
            harvested = self._harvest(run, reservation_id)
            self._normalize(run_id, harvested)
            processing.process(AssembleProductionRun(run_id=run_id), asynchronous=False)
            perfumes = processing.process(CommitProductionRun(run_id=run_id), asynchronous=False)
        except Exception as exc:
            self._abort(run_id, exc)
            raise

        logger.info("production_completed", run_id=run_id, perfumes=len(perfumes))
        return perfumes

    def _replay(self, run: ProductionRun) -> list[dict]:
        if run.status != ProductionRunStatus.COMMITTED.value:
            raise ValidationError(
                {"idempotency_key": [f"Production run {run.id} for this key is {run.status}"]}
            )
        logger.info("production_replayed", run_id=str(run.id), idempotency_key=run.idempotency_key)
        perfumes = processing.repository_for(Perfume).bottled_in_run(run)
        return [perfume.to_dict() for perfume in perfumes]

    # -------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------
    def _reserve(self, run: ProductionRun) -> str:
        run_id = str(run.id)
        available = self.client.available_count(run.product_name)
        shortfall = run.units_needed - available
        replenished = 0
        if shortfall > 0:
            logger.info(
                "production_replenishing",
                run_id=run_id,
                name=run.product_name,
                available=available,
                shortfall=shortfall,
            )
            planted = self.client.plant_units(run.product_name, run.product_name, REPLENISHMENT_ORIGIN, shortfall)
            replenished = len(planted)

        # One reservation per run, keyed by the run id
        reservation_id = run_id
        self.client.reserve_units(run.product_name, run.units_needed, reservation_id)
        processing.process(
            RecordUnitsReserved(run_id=run_id, reservation_id=reservation_id, replenished=replenished),
            asynchronous=False,
        )
        return reservation_id

    def _harvest(self, run: ProductionRun, reservation_id: str) -> list[HarvestedUnit]:
        harvested = self.client.harvest(run.product_name, run.units_needed, reservation_id=reservation_id)
        processing.process(
            RecordHarvest(
                run_id=str(run.id),
                harvested_units=json.dumps([{"id": unit.id, "potency": unit.potency} for unit in harvested]),
            ),
            asynchronous=False,
        )
        return harvested

    def _normalize(self, run_id: str, harvested: list[HarvestedUnit]) -> None:
        for unit in harvested:
            if needs_normalization(unit.potency):
                percent = normalization_percent(unit.potency)
                self.client.adjust_potency(unit.id, percent)
                logger.info("potency_normalized", run_id=run_id, plant_id=unit.id, percent=percent)

    def _abort(self, run_id: str, exc: Exception) -> None:
        run = processing.repository_for(ProductionRun).get(run_id)
        if run.is_terminal:
            return

        if run.status in (ProductionRunStatus.REQUESTED.value, ProductionRunStatus.UNITS_RESERVED.value):
            try:
                self.client.release_reservation(run.reservation_id or run_id)
            except Exception:
                # Leave the run open so the held reservation stays visible
                logger.exception("production_compensation_failed", run_id=run_id)
                return

        status = processing.process(
            AbortProductionRun(run_id=run_id, reason=f"{type(exc).__name__}: {exc}"[:500]),
            asynchronous=False,
        )
        if status == ProductionRunStatus.FAILED.value:
            logger.error("production_run_failed", run_id=run_id, error=str(exc))
        else:
            logger.warning("production_run_compensated", run_id=run_id, error=str(exc))

