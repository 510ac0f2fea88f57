"""Plant aggregate (CQRS): a single unit of raw agricultural stock.

State Machine:
    PLANTED → HARVESTED

A planted plant may additionally be reserved for one production run at a
time. Reserved plants are invisible to availability counts and to ordinary
harvests; only a harvest quoting the same reservation can take them.
"""

import random
from datetime import UTC, datetime
from decimal import ROUND_HALF_EVEN, Decimal
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String

from cultivation.domain import cultivation
from cultivation.plant.events import (
    PlantHarvested,
    PlantPlanted,
    PlantReservationReleased,
    PlantReserved,
    PotencyAdjusted,
)

MIN_POTENCY = Decimal("1.00")
MAX_POTENCY = Decimal("5.00")
_CENTS = Decimal("0.01")


class PlantStatus(Enum):
    PLANTED = "Planted"
    HARVESTED = "Harvested"


def random_potency() -> float:
    """Draw a potency uniformly from [1.00, 5.00], rounded to 2 decimals."""
    drawn = Decimal(str(random.uniform(float(MIN_POTENCY), float(MAX_POTENCY))))
    return float(min(max(drawn.quantize(_CENTS, rounding=ROUND_HALF_EVEN), MIN_POTENCY), MAX_POTENCY))


def validate_percent(percent) -> Decimal:
    """Return ``percent`` as a Decimal, or raise if it lies outside (0, 100]."""
    if percent is None or isinstance(percent, bool):
        raise ValidationError({"percent": ["Percent is required"]})
    try:
        value = Decimal(str(percent))
    except ArithmeticError:
        raise ValidationError({"percent": ["Percent must be a number"]}) from None
    if not value.is_finite() or value <= 0 or value > 100:
        raise ValidationError({"percent": ["Percent must be greater than 0 and at most 100"]})
    return value


def scale_potency(potency, percent) -> float:
    """Scale ``potency`` to ``percent`` percent of itself.

    The product is computed on exact decimals and rounded half-to-even to two
    places, so ``scale_potency(4.65, 65) == 3.02``.
    """
    scaled = Decimal(str(potency)) * validate_percent(percent) / 100
    return float(scaled.quantize(_CENTS, rounding=ROUND_HALF_EVEN))


@cultivation.aggregate
class Plant:
    name = String(required=True, max_length=100)
    taxonomic_name = String(required=True, max_length=150)
    origin = String(required=True, max_length=100)
    potency = Float(default=0.0)
    status = String(
        choices=PlantStatus,
        default=PlantStatus.PLANTED.value,
    )
    reservation_id = Identifier()
    is_reserved = Boolean(default=False)
    planted_at = DateTime()
    harvested_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, taxonomic_name, origin, potency=None):
        """Plant a new unit. A missing potency is drawn at random."""
        if potency is None:
            potency = random_potency()
        elif not MIN_POTENCY <= Decimal(str(potency)) <= MAX_POTENCY:
            raise ValidationError({"potency": ["Potency must be between 1.00 and 5.00"]})
        else:
            potency = float(Decimal(str(potency)).quantize(_CENTS, rounding=ROUND_HALF_EVEN))

        now = datetime.now(UTC)
        plant = cls(
            name=name,
            taxonomic_name=taxonomic_name,
            origin=origin,
            potency=potency,
            status=PlantStatus.PLANTED.value,
            planted_at=now,
            updated_at=now,
        )
        plant.raise_(
            PlantPlanted(
                plant_id=str(plant.id),
                name=name,
                taxonomic_name=taxonomic_name,
                origin=origin,
                potency=potency,
                planted_at=now,
            )
        )
        return plant

    @property
    def is_planted(self) -> bool:
        return self.status == PlantStatus.PLANTED.value

    def _assert_planted(self) -> None:
        if not self.is_planted:
            raise ValidationError({"status": [f"Plant is already {self.status}"]})

    # -------------------------------------------------------------------
    # Potency
    # -------------------------------------------------------------------
    def adjust_potency(self, percent) -> None:
        previous = self.potency
        self.potency = scale_potency(previous, percent)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PotencyAdjusted(
                plant_id=str(self.id),
                percent=str(percent),
                previous_potency=str(previous),
                new_potency=str(self.potency),
                adjusted_at=self.updated_at,
            )
        )

    # -------------------------------------------------------------------
    # Reservation
    # -------------------------------------------------------------------
    def reserve(self, reservation_id: str) -> None:
        self._assert_planted()
        if self.is_reserved:
            raise ValidationError({"reservation_id": ["Plant is already reserved"]})

        self.reservation_id = reservation_id
        self.is_reserved = True
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PlantReserved(
                plant_id=str(self.id),
                name=self.name,
                reservation_id=reservation_id,
                reserved_at=self.updated_at,
            )
        )

    def release(self) -> None:
        """Return a reserved plant to the available stock."""
        if not self.is_reserved:
            raise ValidationError({"reservation_id": ["Plant is not reserved"]})

        reservation_id = self.reservation_id
        self.reservation_id = None
        self.is_reserved = False
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PlantReservationReleased(
                plant_id=str(self.id),
                reservation_id=reservation_id,
                released_at=self.updated_at,
            )
        )

    # -------------------------------------------------------------------
    # Harvest
    # -------------------------------------------------------------------
    def harvest(self) -> None:
        self._assert_planted()
        now = datetime.now(UTC)
        self.status = PlantStatus.HARVESTED.value
        self.is_reserved = False
        self.harvested_at = now
        self.updated_at = now
        self.raise_(
            PlantHarvested(
                plant_id=str(self.id),
                name=self.name,
                potency=str(self.potency),
                reservation_id=self.reservation_id,
                harvested_at=now,
            )
        )
