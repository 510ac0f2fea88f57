"""Package intake: packing a package straight into a warehouse slot."""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from shared.exceptions import CapacityExceededError
from warehousing.domain import warehousing
from warehousing.package.package import Package
from warehousing.warehouse.warehouse import Warehouse

logger = structlog.get_logger(__name__)


@warehousing.command(part_of="Package")
class ReceivePackage:
    """Pack perfumes and store the package in a warehouse."""

    warehouse_id = Identifier(required=True)
    label = String(required=True, max_length=80)
    sender_address = String(required=True, max_length=120)
    perfume_ids = Text(default="[]")  # JSON list of perfume ids


@warehousing.command_handler(part_of=Package)
class PackageIntakeHandler:
    @handle(ReceivePackage)
    def receive_package(self, command):
        warehouse_repo = current_domain.repository_for(Warehouse)
        warehouse = warehouse_repo.get(command.warehouse_id)

        package = Package.pack(
            label=command.label,
            sender_address=command.sender_address,
            perfume_ids=json.loads(command.perfume_ids) if command.perfume_ids else [],
        )
        try:
            warehouse.accept_package(str(package.id))
        except CapacityExceededError:
            logger.warning(
                "intake_rejected_capacity",
                warehouse_id=str(warehouse.id),
                capacity=warehouse.capacity,
                stored_count=warehouse.stored_count,
            )
            raise
        package.store(str(warehouse.id))

        warehouse_repo.add(warehouse)
        current_domain.repository_for(Package).add(package)

        logger.info(
            "package_stored",
            package_id=str(package.id),
            warehouse_id=str(warehouse.id),
            perfumes=len(package.contents),
            stored_count=warehouse.stored_count,
        )
        return package.to_dict()
