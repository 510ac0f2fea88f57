"""Starting a production run: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from processing.domain import processing
from processing.production.run import ProductionRun

logger = structlog.get_logger(__name__)


@processing.command(part_of="ProductionRun")
class StartProductionRun:
    """Open a production run for a request identified by ``idempotency_key``."""

    idempotency_key = String(required=True, max_length=255)
    product_name = String(required=True, max_length=100)
    category = String(required=True, max_length=20)
    bottle_count = Integer(required=True, min_value=1)
    bottle_volume = Integer(required=True)


@processing.command_handler(part_of=ProductionRun)
class StartProductionRunHandler:
    @handle(StartProductionRun)
    def start_production_run(self, command):
        repo = current_domain.repository_for(ProductionRun)
        if repo.find_by_idempotency_key(command.idempotency_key) is not None:
            raise ValidationError({"idempotency_key": ["A production run with this key already exists"]})

        run = ProductionRun.start(
            idempotency_key=command.idempotency_key,
            product_name=command.product_name,
            category=command.category,
            bottle_count=command.bottle_count,
            bottle_volume=command.bottle_volume,
        )
        repo.add(run)

        logger.info(
            "production_run_started",
            run_id=str(run.id),
            product_name=run.product_name,
            bottle_count=run.bottle_count,
            units_needed=run.units_needed,
        )
        return str(run.id)
