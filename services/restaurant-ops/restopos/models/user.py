"""
Restaurant Ops — Staff and role models (configuration data, not transactional)
"""
from enum import Enum as PyEnum

from pydantic import Field

from restopos.models.base import Entity


class UserRole(str, PyEnum):
    """Platform-level role: who may administer staff."""
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


class RestaurantRole(str, PyEnum):
    """Floor role: which restaurant operations a staff member may perform."""
    MANAGER = "manager"
    COOK = "cook"
    WAITER = "waiter"


class UserProfile(Entity):
    name: str
    restaurant_role: RestaurantRole | None = None


class RoleAssignment(Entity):
    principal: str = Field(..., min_length=1)
    role: UserRole
