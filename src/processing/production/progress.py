"""Recording a run's progress through cultivation: commands and handler."""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from processing.domain import processing
from processing.production.run import ProductionRun

logger = structlog.get_logger(__name__)


@processing.command(part_of="ProductionRun")
class RecordUnitsReserved:
    run_id = Identifier(required=True)
    reservation_id = Identifier(required=True)
    replenished = Integer(default=0)


@processing.command(part_of="ProductionRun")
class RecordHarvest:
    run_id = Identifier(required=True)
    harvested_units = Text(required=True)  # JSON list of {id, potency}


@processing.command(part_of="ProductionRun")
class AbortProductionRun:
    """Close a run that cannot complete, compensating or failing it."""

    run_id = Identifier(required=True)
    reason = String(required=True, max_length=500)


@processing.command_handler(part_of=ProductionRun)
class ProductionProgressHandler:
    @handle(RecordUnitsReserved)
    def record_units_reserved(self, command):
        repo = current_domain.repository_for(ProductionRun)
        run = repo.get(command.run_id)
        run.record_reservation(str(command.reservation_id), command.replenished or 0)
        repo.add(run)
        logger.info(
            "production_units_reserved",
            run_id=str(run.id),
            reservation_id=run.reservation_id,
            replenished=run.replenished,
        )

    @handle(RecordHarvest)
    def record_harvest(self, command):
        repo = current_domain.repository_for(ProductionRun)
        run = repo.get(command.run_id)
        run.record_harvest(json.loads(command.harvested_units))
        repo.add(run)
        logger.info("production_run_harvested", run_id=str(run.id), units=len(run.harvested))

    @handle(AbortProductionRun)
    def abort_production_run(self, command):
        repo = current_domain.repository_for(ProductionRun)
        run = repo.get(command.run_id)
        run.abort(command.reason)
        repo.add(run)
        logger.warning(
            "production_run_aborted",
            run_id=str(run.id),
            status=run.status,
            reason=run.failure_reason,
        )
        return run.status
