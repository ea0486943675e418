"""
Restaurant Ops — Menu models

[CONFIG DATA] — edited by managers; prices are integer minor units (cents).
"""
from pydantic import Field

from restopos.models.base import Entity


class MenuItem(Entity):
    id: int = Field(..., ge=0)
    name: str
    category: str
    price: int = Field(..., ge=0)  # minor units
    available: bool = True
