"""Domain events for the Warehouse aggregate."""

from protean.fields import DateTime, Identifier, String

from warehousing.domain import warehousing


@warehousing.event(part_of="Warehouse")
class WarehouseCreated:
    """A new warehouse was opened."""

    __version__ = 1

    warehouse_id = Identifier(required=True)
    label = String(required=True)
    location = String(required=True)
    capacity = Identifier(required=True)  # Stored as string to avoid Integer(0) issue
    created_at = DateTime(required=True)


@warehousing.event(part_of="Warehouse")
class WarehouseSlotTaken:
    """A package took one of the warehouse's storage slots."""

    __version__ = 1

    warehouse_id = Identifier(required=True)
    package_id = Identifier(required=True)
    stored_count = Identifier(required=True)
    capacity = Identifier(required=True)
    taken_at = DateTime(required=True)


@warehousing.event(part_of="Warehouse")
class WarehouseSlotsReleased:
    """Delivered packages freed storage slots."""

    __version__ = 1

    warehouse_id = Identifier(required=True)
    released = Identifier(required=True)
    stored_count = Identifier(required=True)
    released_at = DateTime(required=True)
