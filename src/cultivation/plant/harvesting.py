"""Harvesting: FIFO harvest of planted stock."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from cultivation.domain import cultivation
from cultivation.plant.plant import Plant
from shared.exceptions import InsufficientStockError

logger = structlog.get_logger(__name__)


@cultivation.command(part_of="Plant")
class HarvestUnits:
    """Harvest ``count`` plants named ``name``, oldest first.

    With a ``reservation_id`` only the plants held by that reservation are
    harvested; otherwise only unreserved plants qualify.
    """

    name = String(required=True, max_length=100)
    count = Integer(required=True, min_value=1)
    reservation_id = Identifier()


@cultivation.command_handler(part_of=Plant)
class HarvestingHandler:
    @handle(HarvestUnits)
    def harvest_units(self, command):
        repo = current_domain.repository_for(Plant)

        if command.reservation_id:
            candidates = [p for p in repo.reserved_under(command.reservation_id) if p.name == command.name]
        else:
            candidates = repo.oldest_available(command.name, command.count)

        if len(candidates) < command.count:
            logger.error(
                "harvest_insufficient_stock",
                name=command.name,
                requested=command.count,
                available=len(candidates),
                reservation_id=command.reservation_id,
            )
            raise InsufficientStockError({"count": ["Not enough planted plants"]})

        harvested = []
        for plant in candidates[: command.count]:
            plant.harvest()
            repo.add(plant)
            harvested.append({"id": str(plant.id), "potency": plant.potency})

        logger.info(
            "plants_harvested",
            name=command.name,
            count=len(harvested),
            reservation_id=command.reservation_id,
        )
        return harvested
