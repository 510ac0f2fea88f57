"""Potency adjustment: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier
from protean.utils.globals import current_domain

from cultivation.domain import cultivation
from cultivation.plant.plant import Plant, validate_percent

logger = structlog.get_logger(__name__)


@cultivation.command(part_of="Plant")
class AdjustPotency:
    """Scale a plant's potency to ``percent`` percent of its current value."""

    plant_id = Identifier(required=True)
    percent = Float(required=True)


@cultivation.command_handler(part_of=Plant)
class PotencyHandler:
    @handle(AdjustPotency)
    def adjust_potency(self, command):
        validate_percent(command.percent)

        repo = current_domain.repository_for(Plant)
        try:
            plant = repo.get(command.plant_id)
        except ObjectNotFoundError:
            logger.error("potency_adjustment_unknown_plant", plant_id=str(command.plant_id))
            raise

        previous = plant.potency
        plant.adjust_potency(command.percent)
        repo.add(plant)

        logger.info(
            "potency_adjusted",
            plant_id=str(plant.id),
            percent=command.percent,
            previous_potency=previous,
            new_potency=plant.potency,
        )
        return plant.to_dict()
