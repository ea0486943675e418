"""
Table registry and seating transitions.
"""
import pytest

from restopos.core.errors import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from restopos.models.table import TableStatus
from restopos.ops.tables import can_transition


def test_new_table_starts_available(ops, table):
    assert table.status is TableStatus.AVAILABLE
    assert ops.get_table("nobody", 4).capacity == 2


def test_duplicate_table_number_is_rejected(ops, table):
    with pytest.raises(ValidationError):
        ops.add_table("boss", 4, 8)
    assert ops.get_table("boss", 4).capacity == 2


@pytest.mark.parametrize("number,capacity", [(5, 0), (5, -1), (-1, 4)])
def test_invalid_table_is_rejected(ops, number, capacity):
    with pytest.raises(ValidationError):
        ops.add_table("boss", number, capacity)
    assert ops.list_tables("boss") == ()


@pytest.mark.parametrize("current,requested,allowed", [
    (TableStatus.AVAILABLE, TableStatus.OCCUPIED, True),
    (TableStatus.AVAILABLE, TableStatus.RESERVED, True),
    (TableStatus.RESERVED, TableStatus.OCCUPIED, True),
    (TableStatus.RESERVED, TableStatus.AVAILABLE, True),
    (TableStatus.OCCUPIED, TableStatus.AVAILABLE, True),
    (TableStatus.OCCUPIED, TableStatus.RESERVED, False),
    (TableStatus.AVAILABLE, TableStatus.AVAILABLE, False),
])
def test_table_transitions(current, requested, allowed):
    assert can_transition(current, requested) is allowed


def test_seat_and_free_a_table(ops, table):
    assert ops.update_table_status("server", 4, "reserved").status is TableStatus.RESERVED
    assert ops.update_table_status("server", 4, "occupied").status is TableStatus.OCCUPIED
    assert ops.available_tables("server") == []
    assert ops.update_table_status("server", 4, TableStatus.AVAILABLE).status is TableStatus.AVAILABLE
    assert [t.number for t in ops.available_tables("server")] == [4]


def test_occupied_table_cannot_be_reserved(ops, table):
    ops.update_table_status("server", 4, "occupied")
    with pytest.raises(InvalidTransitionError):
        ops.update_table_status("server", 4, "reserved")
    assert ops.get_table("server", 4).status is TableStatus.OCCUPIED


def test_table_status_errors(ops, table):
    with pytest.raises(ValidationError):
        ops.update_table_status("server", 4, "cleaning")
    with pytest.raises(NotFoundError):
        ops.update_table_status("server", 12, "occupied")
    with pytest.raises(AuthorizationError):
        ops.update_table_status("chef", 4, "occupied")


def test_tables_are_listed_by_number(ops):
    for number in (12, 3, 7):
        ops.add_table("boss", number, 4)
    assert [t.number for t in ops.list_tables("nobody")] == [3, 7, 12]


def test_table_number_given_as_text_cannot_replace_a_table(ops, table):
    ops.update_table_status("server", 4, "occupied")
    before = ops.store.snapshot()

    with pytest.raises(ValidationError, match="already exists"):
        ops.add_table("server", "4", 8)
    assert ops.store.snapshot() == before
    assert ops.get_table("server", 4).status is TableStatus.OCCUPIED


def test_added_table_is_returned_under_its_validated_number(ops):
    table = ops.add_table("server", "11", 6)
    assert table.number == 11
    assert ops.get_table("server", 11).capacity == 6
