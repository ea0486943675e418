"""
Restaurant Ops — Table lifecycle

Seating a table is an explicit call; placing an order against a table
number leaves the table's status alone.
"""
import logging

from restopos.core.access import AccessControl, Operation
from restopos.core.errors import InvalidTransitionError
from restopos.db.store import EntityKind, EntityStore
from restopos.models.base import coerce
from restopos.models.table import Table, TableStatus

logger = logging.getLogger(__name__)

TABLE_TRANSITIONS: dict[TableStatus, frozenset[TableStatus]] = {
    TableStatus.AVAILABLE: frozenset({TableStatus.OCCUPIED, TableStatus.RESERVED}),
    TableStatus.OCCUPIED:  frozenset({TableStatus.AVAILABLE}),
    TableStatus.RESERVED:  frozenset({TableStatus.OCCUPIED, TableStatus.AVAILABLE}),
}


def can_transition(current: TableStatus, requested: TableStatus) -> bool:
    return requested in TABLE_TRANSITIONS[current]


class TableLifecycle:
    def __init__(self, store: EntityStore, access: AccessControl):
        self.store = store
        self.access = access

    def add(self, caller: str, number: int, capacity: int) -> Table:
        with self.store.atomic():
            self.access.authorize(caller, Operation.TAKE_ORDERS)
            key = self.store.create(EntityKind.TABLE, {"number": number, "capacity": capacity})
            table: Table = self.store.get(EntityKind.TABLE, key)
        logger.info("Table %s added (capacity %d)", table.number, table.capacity)
        return table

    def set_status(self, caller: str, number: int, status: TableStatus | str) -> Table:
        requested = coerce(TableStatus, status)

        def mutation(current: Table) -> dict:
            if not can_transition(current.status, requested):
                raise InvalidTransitionError("table", current.status.value, requested.value)
            return {"status": requested}

        with self.store.atomic():
            self.access.authorize(caller, Operation.TAKE_ORDERS)
            table: Table = self.store.update(EntityKind.TABLE, number, mutation)
        logger.info("Table %s: %s by %s", table.number, table.status.value, caller)
        return table
