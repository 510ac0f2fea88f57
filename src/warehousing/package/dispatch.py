"""Dispatch: throttled, batched delivery of stored packages.

Stored packages leave oldest first, in batches sized by the caller's role.
Before each batch the dispatcher waits the role's delay; each batch is then
delivered in its own unit of work. A batch delivers only packages that are
still stored when it runs, so overlapping dispatches never ship the same
package twice.
"""

import json
from collections import Counter
from dataclasses import dataclass, field
from time import sleep

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from warehousing.domain import warehousing
from warehousing.package.package import Package
from warehousing.package.strategy import strategy_for_role
from warehousing.warehouse.warehouse import Warehouse

logger = structlog.get_logger(__name__)


@warehousing.command(part_of="Package")
class DeliverPackageBatch:
    """Deliver the listed packages that are still stored."""

    package_ids = Text(required=True)  # JSON list of package ids
    role = String(required=True, max_length=50)


@warehousing.command_handler(part_of=Package)
class PackageDispatchHandler:
    @handle(DeliverPackageBatch)
    def deliver_package_batch(self, command):
        package_repo = current_domain.repository_for(Package)

        delivered = []
        released = Counter()
        for package_id in json.loads(command.package_ids):
            package = package_repo.get(package_id)
            if not package.is_stored:
                logger.info("package_already_dispatched", package_id=package_id, status=package.status)
                continue
            package.deliver(command.role)
            package_repo.add(package)
            released[package.warehouse_id] += 1
            delivered.append(package.to_dict())

        warehouse_repo = current_domain.repository_for(Warehouse)
        for warehouse_id, count in released.items():
            warehouse = warehouse_repo.get(warehouse_id)
            warehouse.release_slots(count)
            warehouse_repo.add(warehouse)

        return delivered


@dataclass(frozen=True)
class DispatchResult:
    role: str
    packages: list[dict] = field(default_factory=list)

    @property
    def dispatched_count(self) -> int:
        return len(self.packages)


class PackageDispatcher:
    def dispatch(self, requested_quantity: int, role: str | None = None) -> DispatchResult:
        """Deliver up to ``requested_quantity`` stored packages, oldest first.

        Fewer stored packages than requested is not an error; the result
        lists what was actually delivered by this call.
        """
        if requested_quantity is None or requested_quantity <= 0:
            raise ValidationError({"requested_quantity": ["Requested quantity must be greater than 0"]})

        strategy = strategy_for_role(role)
        candidates = current_domain.repository_for(Package).stored_oldest_first(requested_quantity)
        if len(candidates) < requested_quantity:
            logger.warning(
                "partial_dispatch",
                role=strategy.role,
                requested=requested_quantity,
                stored=len(candidates),
            )

        package_ids = [str(package.id) for package in candidates]
        dispatched = []
        for number, batch in enumerate(strategy.batches(package_ids), start=1):
            sleep(strategy.inter_batch_delay)
            delivered = current_domain.process(
                DeliverPackageBatch(package_ids=json.dumps(batch), role=strategy.role),
                asynchronous=False,
            )
            dispatched.extend(delivered)
            logger.info(
                "dispatch_batch_delivered",
                role=strategy.role,
                batch=number,
                delivered=len(delivered),
                total=len(dispatched),
            )

        return DispatchResult(role=strategy.role, packages=dispatched)
