"""
Restaurant Ops — Inventory models

[TRANSACTIONAL DATA] quantity — absolute counts set by managers
[CONFIG DATA]        suppliers, thresholds
"""
from pydantic import Field

from restopos.models.base import Entity


class Supplier(Entity):
    id: int = Field(..., ge=0)
    name: str
    contact_info: str


class InventoryItem(Entity):
    """
    supplier_id is None when the item has no supplier on record; the store
    checks that a present supplier_id points at an existing Supplier.
    """
    id: int = Field(..., ge=0)
    name: str
    quantity: int = Field(0, ge=0)
    low_stock_threshold: int = Field(..., ge=0)
    supplier_id: int | None = None
