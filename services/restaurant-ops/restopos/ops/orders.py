"""
Restaurant Ops — Order lifecycle

State transitions: PENDING → PREPARING → READY → SERVED → COMPLETED
Forward only, one step at a time; COMPLETED is terminal. Kitchen staff
move orders to PREPARING/READY, floor staff to SERVED/COMPLETED.

Closing an order and taking its payment are two separate calls; this
engine never records a transaction on its own.
"""
import logging
import time
from typing import Callable, Iterable, NamedTuple

from restopos.core.access import AccessControl, Operation
from restopos.core.errors import InvalidTransitionError, ValidationError
from restopos.db.store import EntityKind, EntityStore
from restopos.models.base import coerce
from restopos.models.menu import MenuItem
from restopos.models.order import Order, OrderStatus

logger = logging.getLogger(__name__)

ORDER_FLOW: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.SERVED,
    OrderStatus.COMPLETED,
)

# ── Status transition maps ────────────────────────────────────────────────────
NEXT_STATUS: dict[OrderStatus, OrderStatus] = dict(zip(ORDER_FLOW, ORDER_FLOW[1:]))

EDGE_OPERATION: dict[OrderStatus, Operation] = {
    OrderStatus.PREPARING: Operation.KITCHEN,
    OrderStatus.READY:     Operation.KITCHEN,
    OrderStatus.SERVED:    Operation.SERVICE,
    OrderStatus.COMPLETED: Operation.SERVICE,
}


class OrderLine(NamedTuple):
    menu_item_id: int
    quantity: int


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return NEXT_STATUS.get(current) is requested


def _as_line(line) -> OrderLine:
    if isinstance(line, tuple):
        return OrderLine(*line)
    return OrderLine(line.menu_item_id, line.quantity)


class OrderLifecycle:
    def __init__(
        self,
        store: EntityStore,
        access: AccessControl,
        clock: Callable[[], int] = time.time_ns,
    ):
        self.store = store
        self.access = access
        self.clock = clock

    def create(
        self, caller: str, table_number: int | None, lines: Iterable[OrderLine]
    ) -> Order:
        """
        Place a new PENDING order. Unit prices are copied from the menu now,
        so later menu edits never change this order's total.
        """
        with self.store.atomic():
            self.access.authorize(caller, Operation.TAKE_ORDERS)

            items = [self._price_line(_as_line(line)) for line in lines]
            if not items:
                raise ValidationError("an order needs at least one item")
            if table_number is not None and not self.store.exists(EntityKind.TABLE, table_number):
                raise ValidationError(f"table {table_number!r} does not exist")

            order_id = self.store.create(
                EntityKind.ORDER,
                {
                    "table_number": table_number,
                    "items": items,
                    "total": sum(item["price"] * item["quantity"] for item in items),
                    "status": OrderStatus.PENDING,
                    "timestamp": self.clock(),
                    "waiter": caller,
                },
            )
            order: Order = self.store.get(EntityKind.ORDER, order_id)

        logger.info(
            "Order %s: created by %s for table %s, total=%d",
            order.id, caller, order.table_number, order.total,
        )
        return order

    def _price_line(self, line: OrderLine) -> dict:
        if line.quantity <= 0:
            raise ValidationError(
                f"quantity for menu item {line.menu_item_id!r} must be positive, got {line.quantity}"
            )
        menu_item: MenuItem | None = self.store.get(EntityKind.MENU_ITEM, line.menu_item_id)
        if menu_item is None:
            raise ValidationError(f"menu item {line.menu_item_id!r} does not exist")
        if not menu_item.available:
            raise ValidationError(f"menu item '{menu_item.name}' is not available")
        return {"menu_item_id": menu_item.id, "quantity": line.quantity, "price": menu_item.price}

    def advance(self, caller: str, order_id: int, status: OrderStatus | str) -> Order:
        requested = coerce(OrderStatus, status)

        with self.store.atomic():
            self.access.authorize(caller, Operation.ORDER_STATUS)
            operation = EDGE_OPERATION.get(requested)
            if operation is None:
                current: Order = self.store.require(EntityKind.ORDER, order_id)
                raise InvalidTransitionError("order", current.status.value, requested.value)
            self.access.authorize(caller, operation)

            def mutation(current: Order) -> dict:
                if not can_transition(current.status, requested):
                    raise InvalidTransitionError("order", current.status.value, requested.value)
                return {"status": requested}

            order: Order = self.store.update(EntityKind.ORDER, order_id, mutation)

        logger.info("Order %s: %s by %s", order.id, order.status.value, caller)
        return order
