"""Domain events for the Plant aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from cultivation.domain import cultivation


@cultivation.event(part_of="Plant")
class PlantPlanted:
    """A new plant was put in the ground."""

    __version__ = 1

    plant_id = Identifier(required=True)
    name = String(required=True)
    taxonomic_name = String(required=True)
    origin = String(required=True)
    potency = Float(required=True)
    planted_at = DateTime(required=True)


@cultivation.event(part_of="Plant")
class PotencyAdjusted:
    """A plant's potency was scaled by a percentage."""

    __version__ = 1

    plant_id = Identifier(required=True)
    percent = Identifier(required=True)  # Stored as string to avoid Float(0) issue
    previous_potency = Identifier(required=True)
    new_potency = Identifier(required=True)
    adjusted_at = DateTime(required=True)


@cultivation.event(part_of="Plant")
class PlantReserved:
    """A planted plant was set aside for a production run."""

    __version__ = 1

    plant_id = Identifier(required=True)
    name = String(required=True)
    reservation_id = Identifier(required=True)
    reserved_at = DateTime(required=True)


@cultivation.event(part_of="Plant")
class PlantReservationReleased:
    """A reserved plant went back to the available stock."""

    __version__ = 1

    plant_id = Identifier(required=True)
    reservation_id = Identifier(required=True)
    released_at = DateTime(required=True)


@cultivation.event(part_of="Plant")
class PlantHarvested:
    """A planted plant was harvested."""

    __version__ = 1

    plant_id = Identifier(required=True)
    name = String(required=True)
    potency = Identifier(required=True)
    reservation_id = Identifier()
    harvested_at = DateTime(required=True)
