"""Warehouse aggregate (CQRS): a storage location with a fixed capacity.

The warehouse counts its own stored packages. Taking a slot and storing the
package happen in one unit of work, so the count never exceeds capacity.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String

from shared.exceptions import CapacityExceededError
from warehousing.domain import warehousing
from warehousing.warehouse.events import WarehouseCreated, WarehouseSlotsReleased, WarehouseSlotTaken


@warehousing.aggregate
class Warehouse:
    label = String(required=True, max_length=80)
    location = String(required=True, max_length=120)
    capacity = Integer(required=True, min_value=1)
    stored_count = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, label, location, capacity):
        if not capacity or capacity <= 0:
            raise ValidationError({"capacity": ["Capacity must be greater than 0"]})

        now = datetime.now(UTC)
        warehouse = cls(
            label=label,
            location=location,
            capacity=capacity,
            stored_count=0,
            created_at=now,
            updated_at=now,
        )
        warehouse.raise_(
            WarehouseCreated(
                warehouse_id=str(warehouse.id),
                label=label,
                location=location,
                capacity=str(capacity),
                created_at=now,
            )
        )
        return warehouse

    @property
    def free_slots(self) -> int:
        return max(self.capacity - (self.stored_count or 0), 0)

    def accept_package(self, package_id: str) -> None:
        """Take a slot for ``package_id``; fails when the warehouse is full."""
        if (self.stored_count or 0) >= self.capacity:
            raise CapacityExceededError(
                {"warehouse_id": [f"Warehouse {self.label} is at full capacity ({self.capacity})"]}
            )

        now = datetime.now(UTC)
        self.stored_count = (self.stored_count or 0) + 1
        self.updated_at = now
        self.raise_(
            WarehouseSlotTaken(
                warehouse_id=str(self.id),
                package_id=package_id,
                stored_count=str(self.stored_count),
                capacity=str(self.capacity),
                taken_at=now,
            )
        )

    def release_slots(self, count: int = 1) -> None:
        if count < 1:
            raise ValidationError({"count": ["At least one slot must be released"]})
        if count > (self.stored_count or 0):
            raise ValidationError({"count": [f"Warehouse {self.label} holds only {self.stored_count} packages"]})

        now = datetime.now(UTC)
        self.stored_count -= count
        self.updated_at = now
        self.raise_(
            WarehouseSlotsReleased(
                warehouse_id=str(self.id),
                released=str(count),
                stored_count=str(self.stored_count),
                released_at=now,
            )
        )
