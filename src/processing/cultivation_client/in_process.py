"""Cultivation client that calls the cultivation domain in this process."""

from cultivation.domain import cultivation
from cultivation.plant.harvesting import HarvestUnits
from cultivation.plant.plant import Plant
from cultivation.plant.planting import PlantUnits
from cultivation.plant.potency import AdjustPotency
from cultivation.plant.reservation import ReleaseReservation, ReserveUnits
from processing.cultivation_client.port import CultivationClient, HarvestedUnit, PlantRecord


def _record(plant: dict) -> PlantRecord:
    return PlantRecord(
        id=str(plant["id"]),
        name=plant["name"],
        potency=plant["potency"],
        status=plant["status"],
    )


class InProcessCultivationClient(CultivationClient):
    """Runs cultivation commands inside the cultivation domain context."""

    def available_count(self, name: str) -> int:
        with cultivation.domain_context():
            return cultivation.repository_for(Plant).count_available(name)

    def plant_units(self, name: str, taxonomic_name: str, origin: str, count: int) -> list[PlantRecord]:
        with cultivation.domain_context():
            plants = cultivation.process(
                PlantUnits(name=name, taxonomic_name=taxonomic_name, origin=origin, count=count),
                asynchronous=False,
            )
        return [_record(plant) for plant in plants]

    def reserve_units(self, name: str, count: int, reservation_id: str) -> list[str]:
        with cultivation.domain_context():
            result = cultivation.process(
                ReserveUnits(name=name, count=count, reservation_id=reservation_id),
                asynchronous=False,
            )
        return result["plant_ids"]

    def release_reservation(self, reservation_id: str) -> int:
        with cultivation.domain_context():
            return cultivation.process(ReleaseReservation(reservation_id=reservation_id), asynchronous=False)

    def harvest(self, name: str, count: int, reservation_id: str | None = None) -> list[HarvestedUnit]:
        with cultivation.domain_context():
            units = cultivation.process(
                HarvestUnits(name=name, count=count, reservation_id=reservation_id),
                asynchronous=False,
            )
        return [HarvestedUnit(id=unit["id"], potency=unit["potency"]) for unit in units]

    def adjust_potency(self, plant_id: str, percent: float) -> PlantRecord:
        with cultivation.domain_context():
            plant = cultivation.process(AdjustPotency(plant_id=plant_id, percent=percent), asynchronous=False)
        return _record(plant)
