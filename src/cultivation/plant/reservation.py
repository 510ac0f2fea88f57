"""Reservation: holding planted stock for a production run."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from cultivation.domain import cultivation
from cultivation.plant.plant import Plant
from shared.exceptions import InsufficientStockError

logger = structlog.get_logger(__name__)


@cultivation.command(part_of="Plant")
class ReserveUnits:
    """Reserve the ``count`` oldest available plants named ``name``."""

    name = String(required=True, max_length=100)
    count = Integer(required=True, min_value=1)
    reservation_id = Identifier(required=True)


@cultivation.command(part_of="Plant")
class ReleaseReservation:
    """Return every plant still held by a reservation to available stock."""

    reservation_id = Identifier(required=True)


@cultivation.command_handler(part_of=Plant)
class ReservationHandler:
    @handle(ReserveUnits)
    def reserve_units(self, command):
        repo = current_domain.repository_for(Plant)
        reservation_id = str(command.reservation_id)

        # Repeating a reservation that is already in place is a no-op
        held = repo.reserved_under(reservation_id)
        if held:
            return {"reservation_id": reservation_id, "plant_ids": [str(p.id) for p in held]}

        plants = repo.oldest_available(command.name, command.count)
        if len(plants) < command.count:
            logger.error(
                "reservation_insufficient_stock",
                name=command.name,
                requested=command.count,
                available=len(plants),
            )
            raise InsufficientStockError({"count": ["Not enough planted plants"]})

        for plant in plants:
            plant.reserve(reservation_id)
            repo.add(plant)

        logger.info("plants_reserved", name=command.name, count=len(plants), reservation_id=reservation_id)
        return {"reservation_id": reservation_id, "plant_ids": [str(p.id) for p in plants]}

    @handle(ReleaseReservation)
    def release_reservation(self, command):
        repo = current_domain.repository_for(Plant)
        plants = repo.reserved_under(str(command.reservation_id))
        for plant in plants:
            plant.release()
            repo.add(plant)

        logger.info("reservation_released", reservation_id=str(command.reservation_id), count=len(plants))
        return len(plants)
