"""Pure production arithmetic: material need, potency normalization, allocation."""

from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal

from protean.exceptions import ValidationError

# Millilitres of finished product yielded by one harvested plant
YIELD_PER_UNIT = 50

# Harvested potency above this is scaled down before bottling
NORMALIZATION_THRESHOLD = Decimal("4.0")

SHELF_LIFE_YEARS = 2


def units_needed(bottle_count: int, bottle_volume: int) -> int:
    """Plants required for ``bottle_count`` bottles of ``bottle_volume`` ml."""
    total_volume = bottle_count * bottle_volume
    return -(-total_volume // YIELD_PER_UNIT)


def needs_normalization(potency) -> bool:
    return Decimal(str(potency)) > NORMALIZATION_THRESHOLD


def normalization_percent(potency) -> int:
    """Percent to scale a high-potency plant by: its excess over 4.0, in hundredths.

    A plant at 4.65 is scaled to 65% of its potency.
    """
    excess = (Decimal(str(potency)) - NORMALIZATION_THRESHOLD) * 100
    return int(excess.to_integral_value(rounding=ROUND_HALF_EVEN))


def allocate_round_robin(bottle_count: int, plant_ids: list[str]) -> list[str]:
    """Source plant for each bottle: bottle ``i`` takes plant ``i mod len(plant_ids)``."""
    if not plant_ids:
        raise ValidationError({"harvested_units": ["No harvested plants to allocate"]})
    return [plant_ids[i % len(plant_ids)] for i in range(bottle_count)]


def serial_number(perfume_id: str, bottled_at: datetime) -> str:
    return f"PP-{bottled_at.year}-{perfume_id}"


def expiry_for(bottled_at: datetime) -> datetime:
    """Shelf-life end for a bottle; 29 February rolls back to 28 February."""
    try:
        return bottled_at.replace(year=bottled_at.year + SHELF_LIFE_YEARS)
    except ValueError:
        return bottled_at.replace(year=bottled_at.year + SHELF_LIFE_YEARS, day=28)
