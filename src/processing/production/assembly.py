"""Assembling and committing a production run: commands and handler."""

from datetime import UTC, datetime
from uuid import uuid4

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from processing.domain import processing
from processing.production.allocation import allocate_round_robin, serial_number
from processing.production.perfume import Perfume
from processing.production.run import ProductionRun

logger = structlog.get_logger(__name__)


@processing.command(part_of="ProductionRun")
class AssembleProductionRun:
    """Allocate a harvested plant, identity and serial to every bottle."""

    run_id = Identifier(required=True)


@processing.command(part_of="ProductionRun")
class CommitProductionRun:
    """Persist the run's perfumes and close the run."""

    run_id = Identifier(required=True)


@processing.command_handler(part_of=ProductionRun)
class ProductionAssemblyHandler:
    @handle(AssembleProductionRun)
    def assemble_production_run(self, command):
        repo = current_domain.repository_for(ProductionRun)
        run = repo.get(command.run_id)

        bottled_at = datetime.now(UTC)
        sources = allocate_round_robin(run.bottle_count, [unit["id"] for unit in run.harvested])
        allocation = []
        for plant_id in sources:
            perfume_id = str(uuid4())
            allocation.append(
                {
                    "perfume_id": perfume_id,
                    "serial": serial_number(perfume_id, bottled_at),
                    "plant_id": plant_id,
                }
            )

        run.assemble(allocation, bottled_at)
        repo.add(run)
        logger.info("production_run_assembled", run_id=str(run.id), bottles=len(allocation))

    @handle(CommitProductionRun)
    def commit_production_run(self, command):
        run_repo = current_domain.repository_for(ProductionRun)
        perfume_repo = current_domain.repository_for(Perfume)
        run = run_repo.get(command.run_id)

        perfumes = []
        for entry in run.allocated:
            perfume = Perfume.bottle(
                perfume_id=entry["perfume_id"],
                name=run.product_name,
                category=run.category,
                volume_ml=run.bottle_volume,
                plant_id=entry["plant_id"],
                bottled_at=run.bottled_at,
                run_id=str(run.id),
            )
            perfume_repo.add(perfume)
            perfumes.append(perfume)

        run.commit()
        run_repo.add(run)
        logger.info("production_run_committed", run_id=str(run.id), perfumes=len(perfumes))
        return [perfume.to_dict() for perfume in perfumes]
