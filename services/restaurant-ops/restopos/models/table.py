"""
Restaurant Ops — Dining table model
"""
from enum import Enum as PyEnum

from pydantic import Field

from restopos.models.base import Entity


class TableStatus(str, PyEnum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"


class Table(Entity):
    number: int = Field(..., ge=0)  # caller-chosen key
    capacity: int = Field(..., gt=0)
    status: TableStatus = TableStatus.AVAILABLE
