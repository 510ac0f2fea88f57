"""Shared BDD fixtures and step definitions for the Cultivation domain."""

import pytest
from cultivation.plant.events import (
    PlantHarvested,
    PlantPlanted,
    PlantReservationReleased,
    PlantReserved,
    PotencyAdjusted,
)
from cultivation.plant.plant import Plant
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_PLANT_EVENT_CLASSES = {
    "PlantPlanted": PlantPlanted,
    "PotencyAdjusted": PotencyAdjusted,
    "PlantReserved": PlantReserved,
    "PlantReservationReleased": PlantReservationReleased,
    "PlantHarvested": PlantHarvested,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a new plant with potency {potency:f}"), target_fixture="plant")
def new_plant(potency):
    return Plant.create(
        name="Lavender",
        taxonomic_name="Lavandula angustifolia",
        origin="Provence",
        potency=potency,
    )


@given("a harvested plant", target_fixture="plant")
def harvested_plant():
    plant = Plant.create(
        name="Lavender",
        taxonomic_name="Lavandula angustifolia",
        origin="Provence",
        potency=2.0,
    )
    plant.harvest()
    plant._events.clear()
    return plant


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the plant status is "{status}"'))
def plant_status_is(plant, status):
    assert plant.status == status


@then(parsers.cfparse("the plant potency is {potency:f}"))
def plant_potency_is(plant, potency):
    assert plant.potency == potency


@then("the plant action fails with a validation error")
def plant_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} event is raised"))
def plant_event_raised(plant, event_type):
    event_cls = _PLANT_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in plant._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in plant._events]}"
