"""
Restaurant Ops — Financial transaction model

[TRANSACTIONAL DATA] — one row per payment taken.
"""
from pydantic import Field

from restopos.models.base import Entity


class FinancialTransaction(Entity):
    id: int = Field(..., ge=0)
    amount: int = Field(..., ge=0)  # minor units
    payment_method: str  # free text: "Cash", "Card", ...
    order_id: int | None = None
    timestamp: int  # ns since the Unix epoch
