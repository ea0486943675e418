"""
Suppliers, inventory counts and the low-stock flag.
"""
import pytest

from restopos.core.errors import AuthorizationError, NotFoundError, ValidationError
from restopos.ops.inventory import is_low_stock


@pytest.fixture()
def flour(ops):
    supplier_id = ops.add_supplier("boss", "Mill & Co", "orders@mill.example")
    return ops.add_inventory_item("boss", "Flour", supplier_id, low_stock_threshold=10, quantity=25)


def test_supplier_and_item_are_stored(ops, flour):
    item = ops.get_inventory_item("chef", flour)
    assert item.quantity == 25
    assert ops.get_supplier("chef", item.supplier_id).name == "Mill & Co"
    assert not is_low_stock(item)


def test_item_without_supplier(ops):
    item_id = ops.add_inventory_item("boss", "Salt", None, low_stock_threshold=1)
    assert ops.get_inventory_item("boss", item_id).quantity == 0
    assert [i.name for i in ops.low_stock_items("boss")] == ["Salt"]


def test_unknown_supplier_is_rejected(ops):
    with pytest.raises(ValidationError):
        ops.add_inventory_item("boss", "Yeast", 77, low_stock_threshold=2)
    assert ops.list_inventory_items("boss") == ()


def test_low_stock_flag_follows_quantity(ops, flour):
    ops.update_inventory_quantity("boss", flour, 9)
    assert [i.id for i in ops.low_stock_items("chef")] == [flour]

    ops.update_inventory_quantity("boss", flour, 10)
    assert ops.low_stock_items("chef") == []


def test_quantity_update_is_absolute(ops, flour):
    assert ops.update_inventory_quantity("boss", flour, 3).quantity == 3
    assert ops.update_inventory_quantity("boss", flour, 40).quantity == 40


def test_negative_quantity_is_rejected(ops, flour):
    with pytest.raises(ValidationError):
        ops.update_inventory_quantity("boss", flour, -1)
    assert ops.get_inventory_item("boss", flour).quantity == 25


def test_only_managers_touch_inventory(ops, flour):
    with pytest.raises(AuthorizationError):
        ops.update_inventory_quantity("chef", flour, 0)
    with pytest.raises(AuthorizationError):
        ops.add_supplier("server", "Dairy", "")
    assert ops.get_inventory_item("boss", flour).quantity == 25


def test_missing_item_is_not_found(ops):
    with pytest.raises(NotFoundError):
        ops.update_inventory_quantity("boss", 5, 1)
