"""ProductionRun aggregate (CQRS): one attempt to fulfil a production request.

State Machine:
    REQUESTED → UNITS_RESERVED → HARVESTED → ASSEMBLED → COMMITTED
    {REQUESTED, UNITS_RESERVED} → COMPENSATED   (reservation released)
    {HARVESTED, ASSEMBLED} → FAILED             (harvested stock to reconcile)

The idempotency key identifies the request: a key maps to exactly one run.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from processing.domain import processing
from processing.production.allocation import units_needed
from processing.production.events import (
    ProductionRunAssembled,
    ProductionRunCommitted,
    ProductionRunCompensated,
    ProductionRunFailed,
    ProductionRunHarvested,
    ProductionRunStarted,
    ProductionUnitsReserved,
)
from processing.production.perfume import BOTTLE_VOLUMES, PerfumeCategory


class ProductionRunStatus(Enum):
    REQUESTED = "Requested"
    UNITS_RESERVED = "Units_Reserved"
    HARVESTED = "Harvested"
    ASSEMBLED = "Assembled"
    COMMITTED = "Committed"
    COMPENSATED = "Compensated"
    FAILED = "Failed"


_VALID_TRANSITIONS = {
    ProductionRunStatus.REQUESTED: {ProductionRunStatus.UNITS_RESERVED, ProductionRunStatus.COMPENSATED},
    ProductionRunStatus.UNITS_RESERVED: {ProductionRunStatus.HARVESTED, ProductionRunStatus.COMPENSATED},
    ProductionRunStatus.HARVESTED: {ProductionRunStatus.ASSEMBLED, ProductionRunStatus.FAILED},
    ProductionRunStatus.ASSEMBLED: {ProductionRunStatus.COMMITTED, ProductionRunStatus.FAILED},
    ProductionRunStatus.COMMITTED: set(),  # terminal
    ProductionRunStatus.COMPENSATED: set(),  # terminal
    ProductionRunStatus.FAILED: set(),  # terminal
}

_COMPENSABLE_STATUSES = {ProductionRunStatus.REQUESTED, ProductionRunStatus.UNITS_RESERVED}

TERMINAL_STATUSES = {
    ProductionRunStatus.COMMITTED,
    ProductionRunStatus.COMPENSATED,
    ProductionRunStatus.FAILED,
}


@processing.aggregate
class ProductionRun:
    idempotency_key = String(required=True, max_length=255)
    product_name = String(required=True, max_length=100)
    category = String(required=True, choices=PerfumeCategory)
    bottle_count = Integer(required=True, min_value=1)
    bottle_volume = Integer(required=True)
    units_needed = Integer(required=True, min_value=1)
    status = String(
        choices=ProductionRunStatus,
        default=ProductionRunStatus.REQUESTED.value,
    )
    reservation_id = Identifier()
    replenished = Integer(default=0)
    harvested_units = Text()  # JSON list of {id, potency}
    allocation = Text()  # JSON list of {perfume_id, serial, plant_id}
    bottled_at = DateTime()
    failure_reason = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def start(cls, idempotency_key, product_name, category, bottle_count, bottle_volume):
        """Open a run for a production request."""
        if bottle_volume not in BOTTLE_VOLUMES:
            raise ValidationError({"bottle_volume": ["Bottle volume must be 150 or 250"]})
        if not bottle_count or bottle_count < 1:
            raise ValidationError({"bottle_count": ["Bottle count must be at least 1"]})

        needed = units_needed(bottle_count, bottle_volume)
        now = datetime.now(UTC)
        run = cls(
            idempotency_key=idempotency_key,
            product_name=product_name,
            category=category,
            bottle_count=bottle_count,
            bottle_volume=bottle_volume,
            units_needed=needed,
            status=ProductionRunStatus.REQUESTED.value,
            created_at=now,
            updated_at=now,
        )
        run.raise_(
            ProductionRunStarted(
                run_id=str(run.id),
                idempotency_key=idempotency_key,
                product_name=product_name,
                category=category,
                bottle_count=bottle_count,
                bottle_volume=bottle_volume,
                units_needed=needed,
                started_at=now,
            )
        )
        return run

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status: ProductionRunStatus) -> None:
        current = ProductionRunStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    @property
    def is_terminal(self) -> bool:
        return ProductionRunStatus(self.status) in TERMINAL_STATUSES

    @property
    def harvested(self) -> list[dict]:
        return json.loads(self.harvested_units) if self.harvested_units else []

    @property
    def allocated(self) -> list[dict]:
        return json.loads(self.allocation) if self.allocation else []

    # -------------------------------------------------------------------
    # Forward path
    # -------------------------------------------------------------------
    def record_reservation(self, reservation_id: str, replenished: int = 0) -> None:
        self._assert_can_transition(ProductionRunStatus.UNITS_RESERVED)
        now = datetime.now(UTC)
        self.status = ProductionRunStatus.UNITS_RESERVED.value
        self.reservation_id = reservation_id
        self.replenished = replenished
        self.updated_at = now
        self.raise_(
            ProductionUnitsReserved(
                run_id=str(self.id),
                reservation_id=reservation_id,
                replenished=str(replenished),
                reserved_at=now,
            )
        )

    def record_harvest(self, harvested_units: list[dict]) -> None:
        self._assert_can_transition(ProductionRunStatus.HARVESTED)
        if len(harvested_units) != self.units_needed:
            raise ValidationError(
                {"harvested_units": [f"Expected {self.units_needed} harvested units, got {len(harvested_units)}"]}
            )

        now = datetime.now(UTC)
        self.status = ProductionRunStatus.HARVESTED.value
        self.harvested_units = json.dumps(harvested_units)
        self.updated_at = now
        self.raise_(
            ProductionRunHarvested(
                run_id=str(self.id),
                harvested_units=self.harvested_units,
                harvested_at=now,
            )
        )

    def assemble(self, allocation: list[dict], bottled_at: datetime) -> None:
        """Record which plant each perfume comes from, with identities and serials."""
        self._assert_can_transition(ProductionRunStatus.ASSEMBLED)
        if len(allocation) != self.bottle_count:
            raise ValidationError({"allocation": [f"Expected {self.bottle_count} bottles, got {len(allocation)}"]})

        self.status = ProductionRunStatus.ASSEMBLED.value
        self.allocation = json.dumps(allocation)
        self.bottled_at = bottled_at
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductionRunAssembled(
                run_id=str(self.id),
                allocation=self.allocation,
                assembled_at=self.updated_at,
            )
        )

    def commit(self) -> None:
        self._assert_can_transition(ProductionRunStatus.COMMITTED)
        now = datetime.now(UTC)
        self.status = ProductionRunStatus.COMMITTED.value
        self.updated_at = now
        self.raise_(
            ProductionRunCommitted(
                run_id=str(self.id),
                perfume_count=len(self.allocated),
                committed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Failure path
    # -------------------------------------------------------------------
    def abort(self, reason: str) -> None:
        """Close a run that cannot complete.

        Before harvesting nothing irreversible has happened and the run is
        Compensated; afterwards it is Failed and keeps the harvested units
        for reconciliation.
        """
        reason = reason or "Unspecified failure"
        current = ProductionRunStatus(self.status)
        if current in _COMPENSABLE_STATUSES:
            self._compensate(current, reason)
        else:
            self._fail(current, reason)

    def _compensate(self, current: ProductionRunStatus, reason: str) -> None:
        self._assert_can_transition(ProductionRunStatus.COMPENSATED)
        now = datetime.now(UTC)
        self.status = ProductionRunStatus.COMPENSATED.value
        self.failure_reason = reason[:500]
        self.updated_at = now
        self.raise_(
            ProductionRunCompensated(
                run_id=str(self.id),
                previous_status=current.value,
                reason=self.failure_reason,
                compensated_at=now,
            )
        )

    def _fail(self, current: ProductionRunStatus, reason: str) -> None:
        self._assert_can_transition(ProductionRunStatus.FAILED)
        now = datetime.now(UTC)
        self.status = ProductionRunStatus.FAILED.value
        self.failure_reason = reason[:500]
        self.updated_at = now
        self.raise_(
            ProductionRunFailed(
                run_id=str(self.id),
                previous_status=current.value,
                reason=self.failure_reason,
                harvested_units=self.harvested_units,
                failed_at=now,
            )
        )
