"""Planting: commands and handler for single and batched planting."""

import structlog
from protean import handle
from protean.fields import Float, Integer, String
from protean.utils.globals import current_domain

from cultivation.domain import cultivation
from cultivation.plant.plant import Plant

logger = structlog.get_logger(__name__)

# Planted potency above this threshold will need normalizing before use
HIGH_POTENCY_THRESHOLD = 4.0


@cultivation.command(part_of="Plant")
class PlantUnit:
    """Plant a single unit, with a random potency when none is given."""

    name = String(required=True, max_length=100)
    taxonomic_name = String(required=True, max_length=150)
    origin = String(required=True, max_length=100)
    potency = Float()


@cultivation.command(part_of="Plant")
class PlantUnits:
    """Plant ``count`` identical units in one atomic write."""

    name = String(required=True, max_length=100)
    taxonomic_name = String(required=True, max_length=150)
    origin = String(required=True, max_length=100)
    count = Integer(required=True, min_value=1)


def _planted(plant: Plant) -> None:
    logger.info("plant_planted", plant_id=str(plant.id), name=plant.name, potency=plant.potency)
    if plant.potency > HIGH_POTENCY_THRESHOLD:
        logger.warning("high_potency_planted", plant_id=str(plant.id), name=plant.name, potency=plant.potency)


@cultivation.command_handler(part_of=Plant)
class PlantingHandler:
    @handle(PlantUnit)
    def plant_unit(self, command):
        plant = Plant.create(
            name=command.name,
            taxonomic_name=command.taxonomic_name,
            origin=command.origin,
            potency=command.potency,
        )
        current_domain.repository_for(Plant).add(plant)
        _planted(plant)
        return plant.to_dict()

    @handle(PlantUnits)
    def plant_units(self, command):
        repo = current_domain.repository_for(Plant)
        plants = []
        for _ in range(command.count):
            plant = Plant.create(
                name=command.name,
                taxonomic_name=command.taxonomic_name,
                origin=command.origin,
            )
            repo.add(plant)
            _planted(plant)
            plants.append(plant)

        logger.info("plants_planted", name=command.name, count=len(plants))
        return [plant.to_dict() for plant in plants]
