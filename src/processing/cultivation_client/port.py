"""Cultivation client port (abstract interface).

The orchestrator talks to the cultivation service only through this
contract, so it can run against the in-process domain or the internal HTTP
API without changing any application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class HarvestedUnit:
    """A harvested plant as seen by processing."""

    id: str
    potency: float


@dataclass(frozen=True)
class PlantRecord:
    id: str
    name: str
    potency: float
    status: str


class CultivationClient(ABC):
    """Abstract cultivation service interface."""

    @abstractmethod
    def available_count(self, name: str) -> int:
        """Planted, unreserved plants with this name."""
        ...

    @abstractmethod
    def plant_units(self, name: str, taxonomic_name: str, origin: str, count: int) -> list[PlantRecord]:
        """Plant ``count`` units in one batch."""
        ...

    @abstractmethod
    def reserve_units(self, name: str, count: int, reservation_id: str) -> list[str]:
        """Reserve the oldest available plants; returns the reserved plant ids."""
        ...

    @abstractmethod
    def release_reservation(self, reservation_id: str) -> int:
        """Release a reservation; returns how many plants went back to stock."""
        ...

    @abstractmethod
    def harvest(self, name: str, count: int, reservation_id: str | None = None) -> list[HarvestedUnit]:
        ...

    @abstractmethod
    def adjust_potency(self, plant_id: str, percent: float) -> PlantRecord:
        ...
