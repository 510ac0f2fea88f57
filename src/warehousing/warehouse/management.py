"""Warehouse management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from warehousing.domain import warehousing
from warehousing.warehouse.warehouse import Warehouse

logger = structlog.get_logger(__name__)


@warehousing.command(part_of="Warehouse")
class CreateWarehouse:
    """Open a new warehouse."""

    label = String(required=True, max_length=80)
    location = String(required=True, max_length=120)
    capacity = Integer(required=True, min_value=1)


@warehousing.command_handler(part_of=Warehouse)
class WarehouseManagementHandler:
    @handle(CreateWarehouse)
    def create_warehouse(self, command):
        warehouse = Warehouse.create(
            label=command.label,
            location=command.location,
            capacity=command.capacity,
        )
        current_domain.repository_for(Warehouse).add(warehouse)
        logger.info("warehouse_created", warehouse_id=str(warehouse.id), capacity=warehouse.capacity)
        return str(warehouse.id)
