"""
Restaurant Ops — Inventory monitor

An item is low on stock while quantity < low_stock_threshold. Nothing is
cached: the flag is recomputed from the stored item on every read, so
restocking above the threshold clears it immediately.
"""
import logging

from restopos.core.access import AccessControl, Operation
from restopos.core.errors import ValidationError
from restopos.db.store import EntityKind, EntityStore
from restopos.models.inventory import InventoryItem

logger = logging.getLogger(__name__)


def is_low_stock(item: InventoryItem) -> bool:
    return item.quantity < item.low_stock_threshold


class InventoryMonitor:
    is_low_stock = staticmethod(is_low_stock)

    def __init__(self, store: EntityStore, access: AccessControl):
        self.store = store
        self.access = access

    def low_stock_items(self) -> list[InventoryItem]:
        return [item for item in self.store.list_all(EntityKind.INVENTORY_ITEM) if is_low_stock(item)]

    def set_quantity(self, caller: str, item_id: int, quantity: int) -> InventoryItem:
        """Replace the on-hand count (absolute, not a delta)."""
        with self.store.atomic():
            self.access.authorize(caller, Operation.MANAGE_CATALOG)
            if quantity < 0:
                raise ValidationError(f"quantity must not be negative, got {quantity}")
            item: InventoryItem = self.store.update(
                EntityKind.INVENTORY_ITEM, item_id, lambda current: {"quantity": quantity}
            )

        if is_low_stock(item):
            logger.warning(
                "Inventory %s '%s' is low: %d < %d",
                item.id, item.name, item.quantity, item.low_stock_threshold,
            )
        else:
            logger.info("Inventory %s '%s' set to %d", item.id, item.name, item.quantity)
        return item
