"""
Restaurant Ops — Access control gate

Two role layers:
  - system role (admin / user / guest) on a RoleAssignment: staff
    administration and profile bootstrap
  - restaurant role (manager / cook / waiter) on the UserProfile: every
    restaurant mutation, looked up in PERMISSIONS

Callers without a RoleAssignment are guests. Callers without a
restaurant role may read but never mutate restaurant data.
"""
import logging
from enum import Enum as PyEnum

from restopos.core.errors import AuthorizationError
from restopos.db.store import EntityKind, EntityStore
from restopos.models.user import RestaurantRole, RoleAssignment, UserProfile, UserRole

logger = logging.getLogger(__name__)


class Operation(str, PyEnum):
    MANAGE_CATALOG = "manage_catalog"  # menu, inventory, suppliers
    TAKE_ORDERS = "take_orders"        # create orders, manage tables
    KITCHEN = "kitchen"                # order -> preparing / ready
    SERVICE = "service"                # order -> served / completed, payments
    ORDER_STATUS = "order_status"      # any order status request at all


_M, _C, _W = RestaurantRole.MANAGER, RestaurantRole.COOK, RestaurantRole.WAITER

PERMISSIONS: dict[Operation, frozenset[RestaurantRole]] = {
    Operation.MANAGE_CATALOG: frozenset({_M}),
    Operation.TAKE_ORDERS:    frozenset({_M, _W}),
    Operation.KITCHEN:        frozenset({_M, _C}),
    Operation.SERVICE:        frozenset({_M, _W}),
    Operation.ORDER_STATUS:   frozenset({_M, _C, _W}),
}

# Dashboard sections each floor role gets to see.
SECTIONS: dict[str, frozenset[RestaurantRole]] = {
    "orders":    frozenset({_M, _W}),
    "kitchen":   frozenset({_M, _C}),
    "tables":    frozenset({_M, _W}),
    "menu":      frozenset({_M, _C, _W}),
    "inventory": frozenset({_M, _C}),
    "reports":   frozenset({_M}),
    "staff":     frozenset({_M}),
}


def is_permitted(operation: Operation, role: RestaurantRole | None) -> bool:
    return role is not None and role in PERMISSIONS[operation]


def visible_sections(role: RestaurantRole | None) -> list[str]:
    if role is None:
        return []
    return [name for name, roles in SECTIONS.items() if role in roles]


class AccessControl:
    def __init__(self, store: EntityStore):
        self.store = store

    # --- role lookups ----------------------------------------------------

    def system_role(self, caller: str) -> UserRole:
        assignment: RoleAssignment | None = self.store.get(EntityKind.ROLE, caller)
        return assignment.role if assignment else UserRole.GUEST

    def restaurant_role(self, caller: str) -> RestaurantRole | None:
        profile: UserProfile | None = self.store.get(EntityKind.PROFILE, caller)
        return profile.restaurant_role if profile else None

    def is_admin(self, caller: str) -> bool:
        return self.system_role(caller) is UserRole.ADMIN

    def admin_exists(self) -> bool:
        return any(a.role is UserRole.ADMIN for a in self.store.list_all(EntityKind.ROLE))

    # --- bootstrap -------------------------------------------------------

    def initialize(self, caller: str) -> UserRole:
        """
        First caller ever becomes admin. Later unregistered callers are
        registered as plain users; registered callers are left alone.
        """
        with self.store.atomic():
            if self.store.exists(EntityKind.ROLE, caller):
                return self.system_role(caller)
            role = UserRole.USER if self.admin_exists() else UserRole.ADMIN
            self.store.put(EntityKind.ROLE, caller, {"role": role})
        logger.info("Registered %s as %s", caller, role.value)
        return role

    # --- checks ----------------------------------------------------------

    def authorize(self, caller: str, operation: Operation) -> RestaurantRole:
        role = self.restaurant_role(caller)
        if not is_permitted(operation, role):
            allowed = PERMISSIONS[operation]
            logger.warning(
                "Denied %s for %s (restaurant role %s)",
                operation.value, caller, role.value if role else None,
            )
            raise AuthorizationError(
                operation.value, [r.value for r in allowed], role.value if role else None
            )
        return role

    def require_system_role(self, caller: str, action: str, *allowed: UserRole) -> UserRole:
        role = self.system_role(caller)
        if role not in allowed:
            logger.warning("Denied %s for %s (system role %s)", action, caller, role.value)
            raise AuthorizationError(action, [r.value for r in allowed], role.value)
        return role

    def require_admin(self, caller: str, action: str) -> None:
        self.require_system_role(caller, action, UserRole.ADMIN)

    def assign_role(self, caller: str, principal: str, role: UserRole) -> None:
        with self.store.atomic():
            self.require_admin(caller, "assign_user_role")
            self.store.put(EntityKind.ROLE, principal, {"role": role})
        logger.info("%s assigned system role %s to %s", caller, role.value, principal)
