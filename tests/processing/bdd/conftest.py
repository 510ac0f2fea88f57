"""Shared BDD fixtures and step definitions for the Processing domain."""

from datetime import UTC, datetime

import pytest
from processing.production.events import (
    ProductionRunAssembled,
    ProductionRunCommitted,
    ProductionRunCompensated,
    ProductionRunFailed,
    ProductionRunHarvested,
    ProductionRunStarted,
    ProductionUnitsReserved,
)
from processing.production.run import ProductionRun
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_RUN_EVENT_CLASSES = {
    "ProductionRunStarted": ProductionRunStarted,
    "ProductionUnitsReserved": ProductionUnitsReserved,
    "ProductionRunHarvested": ProductionRunHarvested,
    "ProductionRunAssembled": ProductionRunAssembled,
    "ProductionRunCommitted": ProductionRunCommitted,
    "ProductionRunCompensated": ProductionRunCompensated,
    "ProductionRunFailed": ProductionRunFailed,
}


def _start(bottle_count=1, bottle_volume=150):
    return ProductionRun.start(
        idempotency_key="bdd-key",
        product_name="Lavender",
        category="parfum",
        bottle_count=bottle_count,
        bottle_volume=bottle_volume,
    )


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse("a production request for {bottle_count:d} bottles of {bottle_volume:d} ml"),
    target_fixture="run",
)
def requested_run(bottle_count, bottle_volume):
    return _start(bottle_count, bottle_volume)


@given("a run with reserved units", target_fixture="run")
def reserved_run():
    run = _start()
    run.record_reservation("res-bdd")
    run._events.clear()
    return run


@given("a run with harvested units", target_fixture="run")
def harvested_run():
    run = _start()
    run.record_reservation("res-bdd")
    run.record_harvest([{"id": f"plant-{i}", "potency": 3.0} for i in range(run.units_needed)])
    run._events.clear()
    return run


@given("a committed run", target_fixture="run")
def committed_run():
    run = _start()
    run.record_reservation("res-bdd")
    run.record_harvest([{"id": f"plant-{i}", "potency": 3.0} for i in range(run.units_needed)])
    run.assemble(
        [{"perfume_id": "p-0", "serial": "PP-2025-p-0", "plant_id": run.harvested[0]["id"]}],
        datetime.now(UTC),
    )
    run.commit()
    run._events.clear()
    return run


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the run status is "{status}"'))
def run_status_is(run, status):
    assert run.status == status


@then(parsers.cfparse("the run needs {units:d} units"))
def run_needs_units(run, units):
    assert run.units_needed == units


@then("the run action fails with a validation error")
def run_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} event is raised"))
def run_event_raised(run, event_type):
    event_cls = _RUN_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in run._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in run._events]}"
