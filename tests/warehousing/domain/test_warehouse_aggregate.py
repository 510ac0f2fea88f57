"""Tests for the Warehouse aggregate."""

import pytest
from protean.exceptions import ValidationError
from shared.exceptions import CapacityExceededError
from warehousing.warehouse.events import WarehouseCreated, WarehouseSlotsReleased, WarehouseSlotTaken
from warehousing.warehouse.warehouse import Warehouse


def _make_warehouse(capacity=2):
    return Warehouse.create(label="Grasse North", location="Grasse", capacity=capacity)


class TestWarehouseCreation:
    def test_create_sets_fields(self):
        warehouse = _make_warehouse(capacity=5)
        assert warehouse.label == "Grasse North"
        assert warehouse.location == "Grasse"
        assert warehouse.capacity == 5
        assert warehouse.stored_count == 0
        assert warehouse.free_slots == 5

    def test_create_raises_event(self):
        warehouse = _make_warehouse(capacity=5)
        assert len(warehouse._events) == 1
        event = warehouse._events[0]
        assert isinstance(event, WarehouseCreated)
        assert event.capacity == "5"

    @pytest.mark.parametrize("capacity", [0, -3])
    def test_non_positive_capacity_rejected(self, capacity):
        with pytest.raises(ValidationError) as exc:
            _make_warehouse(capacity=capacity)
        assert "capacity" in exc.value.messages


class TestWarehouseSlots:
    def test_accept_package_takes_a_slot(self):
        warehouse = _make_warehouse()
        warehouse._events.clear()
        warehouse.accept_package("pkg-1")
        assert warehouse.stored_count == 1
        assert warehouse.free_slots == 1
        event = warehouse._events[0]
        assert isinstance(event, WarehouseSlotTaken)
        assert event.package_id == "pkg-1"
        assert event.stored_count == "1"

    def test_capacity_one_accepts_exactly_one(self):
        warehouse = _make_warehouse(capacity=1)
        warehouse.accept_package("pkg-1")
        with pytest.raises(CapacityExceededError):
            warehouse.accept_package("pkg-2")
        assert warehouse.stored_count == 1

    def test_capacity_error_is_a_validation_error(self):
        warehouse = _make_warehouse(capacity=1)
        warehouse.accept_package("pkg-1")
        with pytest.raises(ValidationError) as exc:
            warehouse.accept_package("pkg-2")
        assert "warehouse_id" in exc.value.messages

    def test_release_slots(self):
        warehouse = _make_warehouse()
        warehouse.accept_package("pkg-1")
        warehouse.accept_package("pkg-2")
        warehouse._events.clear()
        warehouse.release_slots(2)
        assert warehouse.stored_count == 0
        assert warehouse.free_slots == 2
        assert isinstance(warehouse._events[0], WarehouseSlotsReleased)

    def test_release_more_than_stored_rejected(self):
        warehouse = _make_warehouse()
        warehouse.accept_package("pkg-1")
        with pytest.raises(ValidationError):
            warehouse.release_slots(2)
        assert warehouse.stored_count == 1

    def test_release_zero_rejected(self):
        warehouse = _make_warehouse()
        with pytest.raises(ValidationError):
            warehouse.release_slots(0)

    def test_released_slot_can_be_taken_again(self):
        warehouse = _make_warehouse(capacity=1)
        warehouse.accept_package("pkg-1")
        warehouse.release_slots(1)
        warehouse.accept_package("pkg-2")
        assert warehouse.stored_count == 1
