"""Domain events for the ProductionRun and Perfume aggregates."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from processing.domain import processing


# ---------------------------------------------------------------------------
# ProductionRun
# ---------------------------------------------------------------------------
@processing.event(part_of="ProductionRun")
class ProductionRunStarted:
    """A production request was accepted and a run opened for it."""

    __version__ = 1

    run_id = Identifier(required=True)
    idempotency_key = String(required=True)
    product_name = String(required=True)
    category = String(required=True)
    bottle_count = Integer(required=True)
    bottle_volume = Integer(required=True)
    units_needed = Integer(required=True)
    started_at = DateTime(required=True)


@processing.event(part_of="ProductionRun")
class ProductionUnitsReserved:
    """The plants a run needs were reserved in cultivation."""

    __version__ = 1

    run_id = Identifier(required=True)
    reservation_id = Identifier(required=True)
    replenished = Identifier(required=True)  # Stored as string to avoid Integer(0) issue
    reserved_at = DateTime(required=True)


@processing.event(part_of="ProductionRun")
class ProductionRunHarvested:
    """The reserved plants were harvested."""

    __version__ = 1

    run_id = Identifier(required=True)
    harvested_units = Text(required=True)  # JSON list of {id, potency}
    harvested_at = DateTime(required=True)


@processing.event(part_of="ProductionRun")
class ProductionRunAssembled:
    """Perfume identities, serials and source plants were allocated."""

    __version__ = 1

    run_id = Identifier(required=True)
    allocation = Text(required=True)  # JSON list of {perfume_id, serial, plant_id}
    assembled_at = DateTime(required=True)


@processing.event(part_of="ProductionRun")
class ProductionRunCommitted:
    """The run's perfumes were persisted."""

    __version__ = 1

    run_id = Identifier(required=True)
    perfume_count = Integer(required=True)
    committed_at = DateTime(required=True)


@processing.event(part_of="ProductionRun")
class ProductionRunCompensated:
    """The run failed before harvesting and its reservation was released."""

    __version__ = 1

    run_id = Identifier(required=True)
    previous_status = String(required=True)
    reason = String(required=True)
    compensated_at = DateTime(required=True)


@processing.event(part_of="ProductionRun")
class ProductionRunFailed:
    """The run failed after harvesting; the harvested stock needs reconciling."""

    __version__ = 1

    run_id = Identifier(required=True)
    previous_status = String(required=True)
    reason = String(required=True)
    harvested_units = Text()
    failed_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Perfume
# ---------------------------------------------------------------------------
@processing.event(part_of="Perfume")
class PerfumeBottled:
    """A finished perfume was bottled and labelled."""

    __version__ = 1

    perfume_id = Identifier(required=True)
    serial_number = String(required=True)
    name = String(required=True)
    category = String(required=True)
    volume_ml = Integer(required=True)
    plant_id = Identifier(required=True)
    run_id = Identifier()
    expires_at = DateTime(required=True)
    bottled_at = DateTime(required=True)
