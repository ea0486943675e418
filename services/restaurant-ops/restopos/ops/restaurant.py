"""
Restaurant Ops — Operation facade

The one entry point the HTTP layer (or any other binding) talks to. Every
method takes the caller's identity explicitly; there is no session state.
Reads return None for a missing entity; mutations that need an existing
entity raise NotFoundError.
"""
import logging
import time
from typing import Callable, Iterable

from restopos.core.access import AccessControl, Operation, visible_sections
from restopos.db.store import EntityKind, EntityStore
from restopos.models.base import coerce
from restopos.models.finance import FinancialTransaction
from restopos.models.inventory import InventoryItem, Supplier
from restopos.models.menu import MenuItem
from restopos.models.order import Order, OrderStatus
from restopos.models.table import Table, TableStatus
from restopos.models.user import RestaurantRole, UserProfile, UserRole
from restopos.ops.inventory import InventoryMonitor
from restopos.ops.orders import OrderLifecycle, OrderLine
from restopos.ops.reports import FinancialReport, ReportPeriod, build_report
from restopos.ops.tables import TableLifecycle

logger = logging.getLogger(__name__)

_UNSET = object()


class RestaurantOperations:
    def __init__(self, store: EntityStore | None = None, clock: Callable[[], int] = time.time_ns):
        self.store = store or EntityStore()
        self.clock = clock
        self.access = AccessControl(self.store)
        self.orders = OrderLifecycle(self.store, self.access, clock)
        self.tables = TableLifecycle(self.store, self.access)
        self.inventory = InventoryMonitor(self.store, self.access)

    # ─── Menu ─────────────────────────────────────────────────────────────────

    def add_menu_item(self, caller: str, name: str, category: str, price: int) -> int:
        with self.store.atomic():
            self.access.authorize(caller, Operation.MANAGE_CATALOG)
            item_id = self.store.create(
                EntityKind.MENU_ITEM, {"name": name, "category": category, "price": price}
            )
        logger.info("Menu item %s '%s' added at %d", item_id, name, price)
        return item_id

    def get_menu_item(self, caller: str, menu_item_id: int) -> MenuItem | None:
        return self.store.get(EntityKind.MENU_ITEM, menu_item_id)

    def list_menu_items(self, caller: str) -> tuple[MenuItem, ...]:
        return self.store.list_all(EntityKind.MENU_ITEM)

    def update_menu_item(
        self,
        caller: str,
        menu_item_id: int,
        name: str | None = None,
        category: str | None = None,
        price: int | None = None,
    ) -> MenuItem:
        changes = {
            field: value
            for field, value in (("name", name), ("category", category), ("price", price))
            if value is not None
        }
        with self.store.atomic():
            self.access.authorize(caller, Operation.MANAGE_CATALOG)
            item = self.store.update(EntityKind.MENU_ITEM, menu_item_id, lambda current: changes)
        logger.info("Menu item %s updated: %s", menu_item_id, sorted(changes))
        return item

    def update_menu_item_availability(self, caller: str, menu_item_id: int, available: bool) -> MenuItem:
        with self.store.atomic():
            self.access.authorize(caller, Operation.MANAGE_CATALOG)
            item = self.store.update(
                EntityKind.MENU_ITEM, menu_item_id, lambda current: {"available": available}
            )
        logger.info("Menu item %s available=%s", menu_item_id, available)
        return item

    def available_menu_items(self, caller: str) -> list[MenuItem]:
        return [item for item in self.store.list_all(EntityKind.MENU_ITEM) if item.available]

    # ─── Suppliers & inventory ────────────────────────────────────────────────

    def add_supplier(self, caller: str, name: str, contact_info: str) -> int:
        with self.store.atomic():
            self.access.authorize(caller, Operation.MANAGE_CATALOG)
            supplier_id = self.store.create(
                EntityKind.SUPPLIER, {"name": name, "contact_info": contact_info}
            )
        logger.info("Supplier %s '%s' added", supplier_id, name)
        return supplier_id

    def get_supplier(self, caller: str, supplier_id: int) -> Supplier | None:
        return self.store.get(EntityKind.SUPPLIER, supplier_id)

    def list_suppliers(self, caller: str) -> tuple[Supplier, ...]:
        return self.store.list_all(EntityKind.SUPPLIER)

    def add_inventory_item(
        self,
        caller: str,
        name: str,
        supplier_id: int | None,
        low_stock_threshold: int,
        quantity: int = 0,
    ) -> int:
        with self.store.atomic():
            self.access.authorize(caller, Operation.MANAGE_CATALOG)
            item_id = self.store.create(
                EntityKind.INVENTORY_ITEM,
                {
                    "name": name,
                    "supplier_id": supplier_id,
                    "low_stock_threshold": low_stock_threshold,
                    "quantity": quantity,
                },
            )
        logger.info("Inventory item %s '%s' added", item_id, name)
        return item_id

    def get_inventory_item(self, caller: str, item_id: int) -> InventoryItem | None:
        return self.store.get(EntityKind.INVENTORY_ITEM, item_id)

    def list_inventory_items(self, caller: str) -> tuple[InventoryItem, ...]:
        return self.store.list_all(EntityKind.INVENTORY_ITEM)

    def update_inventory_quantity(self, caller: str, item_id: int, quantity: int) -> InventoryItem:
        return self.inventory.set_quantity(caller, item_id, quantity)

    def low_stock_items(self, caller: str) -> list[InventoryItem]:
        return self.inventory.low_stock_items()

    # ─── Tables ───────────────────────────────────────────────────────────────

    def add_table(self, caller: str, number: int, capacity: int) -> Table:
        return self.tables.add(caller, number, capacity)

    def get_table(self, caller: str, number: int) -> Table | None:
        return self.store.get(EntityKind.TABLE, number)

    def list_tables(self, caller: str) -> tuple[Table, ...]:
        return self.store.list_all(EntityKind.TABLE)

    def update_table_status(self, caller: str, number: int, status: TableStatus | str) -> Table:
        return self.tables.set_status(caller, number, status)

    def available_tables(self, caller: str) -> list[Table]:
        return [t for t in self.store.list_all(EntityKind.TABLE) if t.status is TableStatus.AVAILABLE]

    # ─── Orders ───────────────────────────────────────────────────────────────

    def create_order(
        self, caller: str, table_number: int | None, items: Iterable[OrderLine]
    ) -> int:
        return self.orders.create(caller, table_number, items).id

    def get_order(self, caller: str, order_id: int) -> Order | None:
        return self.store.get(EntityKind.ORDER, order_id)

    def list_orders(self, caller: str) -> tuple[Order, ...]:
        return self.store.list_all(EntityKind.ORDER)

    def update_order_status(self, caller: str, order_id: int, status: OrderStatus | str) -> Order:
        return self.orders.advance(caller, order_id, status)

    def kitchen_queue(self, caller: str) -> list[Order]:
        """Orders the kitchen still has to work on, oldest first."""
        waiting = (OrderStatus.PENDING, OrderStatus.PREPARING)
        orders = [o for o in self.store.list_all(EntityKind.ORDER) if o.status in waiting]
        return sorted(orders, key=lambda o: (o.timestamp, o.id))

    def active_orders(self, caller: str) -> list[Order]:
        orders = [o for o in self.store.list_all(EntityKind.ORDER) if o.status is not OrderStatus.COMPLETED]
        return sorted(orders, key=lambda o: (o.timestamp, o.id), reverse=True)

    # ─── Transactions & reports ───────────────────────────────────────────────

    def record_transaction(
        self, caller: str, amount: int, payment_method: str, order_id: int | None = None
    ) -> int:
        with self.store.atomic():
            self.access.authorize(caller, Operation.SERVICE)
            txn_id = self.store.create(
                EntityKind.TRANSACTION,
                {
                    "amount": amount,
                    "payment_method": payment_method,
                    "order_id": order_id,
                    "timestamp": self.clock(),
                },
            )
        logger.info("Transaction %s: %d via %s (order %s)", txn_id, amount, payment_method, order_id)
        return txn_id

    def get_transaction(self, caller: str, txn_id: int) -> FinancialTransaction | None:
        return self.store.get(EntityKind.TRANSACTION, txn_id)

    def list_transactions(self, caller: str) -> tuple[FinancialTransaction, ...]:
        return self.store.list_all(EntityKind.TRANSACTION)

    def financial_report(
        self, caller: str, period: ReportPeriod | str, now: int | None = None
    ) -> FinancialReport:
        period = coerce(ReportPeriod, period)
        snapshot = self.store.snapshot()
        return build_report(
            snapshot.orders,
            snapshot.transactions,
            period,
            self.clock() if now is None else now,
        )

    # ─── Profiles & staff ─────────────────────────────────────────────────────

    def get_caller_profile(self, caller: str) -> UserProfile | None:
        return self.store.get(EntityKind.PROFILE, caller)

    def get_user_profile(self, caller: str, principal: str) -> UserProfile | None:
        if principal != caller:
            self.access.require_admin(caller, "get_user_profile")
        return self.store.get(EntityKind.PROFILE, principal)

    def save_caller_profile(self, caller: str, name: str, restaurant_role=_UNSET) -> UserProfile:
        """
        Save the caller's own profile. Leaving restaurant_role out keeps the
        current one. A caller without a floor role may pick one on first
        setup; changing an existing role takes an admin.
        """
        with self.store.atomic():
            self.access.require_system_role(
                caller, "save_caller_profile", UserRole.USER, UserRole.ADMIN
            )
            current = self.access.restaurant_role(caller)
            if restaurant_role is _UNSET:
                role = current
            else:
                role = None if restaurant_role is None else coerce(RestaurantRole, restaurant_role)
                if current is not None and role is not current:
                    self.access.require_admin(caller, "change_own_restaurant_role")
            profile = self.store.put(
                EntityKind.PROFILE, caller, {"name": name, "restaurant_role": role}
            )
        logger.info("Profile saved for %s", caller)
        return profile

    def add_staff_member(
        self, caller: str, name: str, role: RestaurantRole | str, principal: str
    ) -> UserProfile:
        """Create or overwrite a staff profile; guests are promoted to plain users."""
        with self.store.atomic():
            self.access.require_admin(caller, "add_staff_member")
            role = coerce(RestaurantRole, role)
            profile = self.store.put(
                EntityKind.PROFILE, principal, {"name": name, "restaurant_role": role}
            )
            if self.access.system_role(principal) is UserRole.GUEST:
                self.store.put(EntityKind.ROLE, principal, {"role": UserRole.USER})
        logger.info("Staff member %s added as %s by %s", principal, role.value, caller)
        return profile

    def update_staff_member(
        self, caller: str, principal: str, name: str, role: RestaurantRole | str
    ) -> UserProfile:
        with self.store.atomic():
            self.access.require_admin(caller, "update_staff_member")
            role = coerce(RestaurantRole, role)
            self.store.require(EntityKind.PROFILE, principal)
            profile = self.store.put(
                EntityKind.PROFILE, principal, {"name": name, "restaurant_role": role}
            )
        logger.info("Staff member %s updated to %s by %s", principal, role.value, caller)
        return profile

    def list_staff_members(self, caller: str) -> tuple[tuple[str, UserProfile], ...]:
        self.access.require_admin(caller, "list_staff_members")
        return self.store.entries(EntityKind.PROFILE)

    def assign_user_role(self, caller: str, principal: str, role: UserRole | str) -> None:
        self.access.assign_role(caller, principal, coerce(UserRole, role))

    # ─── Access ───────────────────────────────────────────────────────────────

    def initialize_access_control(self, caller: str) -> UserRole:
        return self.access.initialize(caller)

    def get_caller_role(self, caller: str) -> UserRole:
        return self.access.system_role(caller)

    def is_caller_admin(self, caller: str) -> bool:
        return self.access.is_admin(caller)

    def visible_sections(self, caller: str) -> list[str]:
        return visible_sections(self.access.restaurant_role(caller))
