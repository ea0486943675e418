"""
Restaurant Ops — Order models

[TRANSACTIONAL DATA] — orders are never deleted; `completed` closes them
and keeps them around for reporting.
"""
from enum import Enum as PyEnum

from pydantic import Field, model_validator

from restopos.models.base import Entity


class OrderStatus(str, PyEnum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    COMPLETED = "completed"


class OrderItem(Entity):
    """One order line. `price` is the menu price copied when the order was placed."""
    menu_item_id: int = Field(..., ge=0)
    quantity: int = Field(..., gt=0)
    price: int = Field(..., ge=0)

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


class Order(Entity):
    id: int = Field(..., ge=0)
    table_number: int | None = None
    items: tuple[OrderItem, ...] = Field(..., min_length=1)
    total: int = Field(..., ge=0)
    status: OrderStatus = OrderStatus.PENDING
    timestamp: int  # ns since the Unix epoch
    waiter: str

    @model_validator(mode="after")
    def _total_matches_items(self) -> "Order":
        expected = sum(item.line_total for item in self.items)
        if self.total != expected:
            raise ValueError(f"order total {self.total} does not match items sum {expected}")
        return self
