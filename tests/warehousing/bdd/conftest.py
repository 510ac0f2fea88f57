"""Shared BDD fixtures and step definitions for the Warehousing domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from warehousing.package.events import PackageDelivered, PackagePacked, PackageStored
from warehousing.package.package import Package
from warehousing.warehouse.warehouse import Warehouse

_PACKAGE_EVENT_CLASSES = {
    "PackagePacked": PackagePacked,
    "PackageStored": PackageStored,
    "PackageDelivered": PackageDelivered,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a warehouse with capacity {capacity:d}"), target_fixture="warehouse")
def warehouse_with_capacity(capacity):
    warehouse = Warehouse.create(label="Grasse North", location="Grasse", capacity=capacity)
    warehouse._events.clear()
    return warehouse


@given("a packed package", target_fixture="package")
def packed_package():
    package = Package.pack(label="Box 1", sender_address="1 Rue Droite, Grasse", perfume_ids=["perf-1"])
    package._events.clear()
    return package


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the package status is "{status}"'))
def package_status_is(package, status):
    assert package.status == status


@then(parsers.cfparse("the warehouse holds {count:d} package"))
def warehouse_holds(warehouse, count):
    assert warehouse.stored_count == count


@then("the offer fails with a validation error")
def offer_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} event is raised"))
def package_event_raised(package, event_type):
    event_cls = _PACKAGE_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in package._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in package._events]}"
