"""Perfume aggregate: one finished, labelled bottle.

Perfumes are created only by committing a production run and never change
afterwards. The identity is assigned before persistence, so the serial
number ``PP-<year>-<id>`` is final from construction.
"""

from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from processing.domain import processing
from processing.production.allocation import expiry_for, serial_number
from processing.production.events import PerfumeBottled


class PerfumeCategory(Enum):
    PARFUM = "parfum"
    COLOGNE = "cologne"


BOTTLE_VOLUMES = (150, 250)


@processing.aggregate
class Perfume:
    name = String(required=True, max_length=100)
    category = String(required=True, choices=PerfumeCategory)
    volume_ml = Integer(required=True)
    serial_number = String(required=True, max_length=100)
    plant_id = Identifier(required=True)
    run_id = Identifier()
    expires_at = DateTime(required=True)
    created_at = DateTime(required=True)

    @classmethod
    def bottle(cls, perfume_id, name, category, volume_ml, plant_id, bottled_at: datetime, run_id=None):
        """Bottle a perfume from a harvested plant."""
        if volume_ml not in BOTTLE_VOLUMES:
            raise ValidationError({"volume_ml": ["Bottle volume must be 150 or 250"]})

        perfume = cls(
            id=perfume_id,
            name=name,
            category=category,
            volume_ml=volume_ml,
            serial_number=serial_number(perfume_id, bottled_at),
            plant_id=plant_id,
            run_id=run_id,
            expires_at=expiry_for(bottled_at),
            created_at=bottled_at,
        )
        perfume.raise_(
            PerfumeBottled(
                perfume_id=str(perfume.id),
                serial_number=perfume.serial_number,
                name=name,
                category=category,
                volume_ml=volume_ml,
                plant_id=plant_id,
                run_id=run_id,
                expires_at=perfume.expires_at,
                bottled_at=bottled_at,
            )
        )
        return perfume
