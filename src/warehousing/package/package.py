"""Package aggregate (CQRS): packed perfumes moving through a warehouse.

State Machine:
    PACKED → STORED → DELIVERED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from warehousing.domain import warehousing
from warehousing.package.events import PackageDelivered, PackagePacked, PackageStored


class PackageStatus(Enum):
    PACKED = "Packed"
    STORED = "Stored"
    DELIVERED = "Delivered"


_VALID_TRANSITIONS = {
    PackageStatus.PACKED: {PackageStatus.STORED},
    PackageStatus.STORED: {PackageStatus.DELIVERED},
    PackageStatus.DELIVERED: set(),  # terminal
}


@warehousing.aggregate
class Package:
    label = String(required=True, max_length=80)
    sender_address = String(required=True, max_length=120)
    perfume_ids = Text(default="[]")  # JSON list of perfume ids
    status = String(
        choices=PackageStatus,
        default=PackageStatus.PACKED.value,
    )
    warehouse_id = Identifier()
    packed_at = DateTime()
    stored_at = DateTime()
    delivered_at = DateTime()

    @classmethod
    def pack(cls, label, sender_address, perfume_ids: list[str]):
        now = datetime.now(UTC)
        encoded = json.dumps([str(perfume_id) for perfume_id in perfume_ids])
        package = cls(
            label=label,
            sender_address=sender_address,
            perfume_ids=encoded,
            status=PackageStatus.PACKED.value,
            packed_at=now,
        )
        package.raise_(
            PackagePacked(
                package_id=str(package.id),
                label=label,
                sender_address=sender_address,
                perfume_ids=encoded,
                packed_at=now,
            )
        )
        return package

    def _assert_can_transition(self, target_status: PackageStatus) -> None:
        current = PackageStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    @property
    def contents(self) -> list[str]:
        return json.loads(self.perfume_ids) if self.perfume_ids else []

    @property
    def is_stored(self) -> bool:
        return self.status == PackageStatus.STORED.value

    def store(self, warehouse_id: str) -> None:
        self._assert_can_transition(PackageStatus.STORED)
        now = datetime.now(UTC)
        self.status = PackageStatus.STORED.value
        self.warehouse_id = warehouse_id
        self.stored_at = now
        self.raise_(
            PackageStored(
                package_id=str(self.id),
                warehouse_id=warehouse_id,
                stored_at=now,
            )
        )

    def deliver(self, role: str) -> None:
        self._assert_can_transition(PackageStatus.DELIVERED)
        now = datetime.now(UTC)
        self.status = PackageStatus.DELIVERED.value
        self.delivered_at = now
        self.raise_(
            PackageDelivered(
                package_id=str(self.id),
                warehouse_id=self.warehouse_id,
                role=role,
                delivered_at=now,
            )
        )
