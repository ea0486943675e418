"""
Restaurant Ops — Keyed in-memory entity store

One re-entrant lock serialises every read and write. Writes build a fresh
immutable entity, validate it, check cross-entity references and only then
swap it in, so a rejected call leaves nothing behind.

Key schemes:
  - generated ids (monotonic per collection, never reused): menu items,
    inventory items, suppliers, orders, transactions
  - natural keys: tables (number), profiles and role assignments (principal)
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum as PyEnum
from types import MappingProxyType
from typing import Any, Callable, Hashable, Mapping

from pydantic import BaseModel, ValidationError as PydanticValidationError

from restopos.core.errors import NotFoundError, ValidationError
from restopos.models.finance import FinancialTransaction
from restopos.models.inventory import InventoryItem, Supplier
from restopos.models.menu import MenuItem
from restopos.models.order import Order
from restopos.models.table import Table
from restopos.models.user import RoleAssignment, UserProfile

logger = logging.getLogger(__name__)

Mutation = Callable[[Any], Mapping[str, Any]]


class EntityKind(str, PyEnum):
    MENU_ITEM = "menu_item"
    INVENTORY_ITEM = "inventory_item"
    SUPPLIER = "supplier"
    TABLE = "table"
    ORDER = "order"
    TRANSACTION = "transaction"
    PROFILE = "profile"
    ROLE = "role"


@dataclass(frozen=True)
class _KindRules:
    model: type[BaseModel]
    key_field: str | None  # None: key lives outside the entity (profiles)
    generated: bool
    immutable: frozenset[str] = frozenset()


_RULES: dict[EntityKind, _KindRules] = {
    EntityKind.MENU_ITEM: _KindRules(MenuItem, "id", True),
    EntityKind.INVENTORY_ITEM: _KindRules(InventoryItem, "id", True),
    EntityKind.SUPPLIER: _KindRules(Supplier, "id", True),
    EntityKind.TABLE: _KindRules(Table, "number", False),
    EntityKind.ORDER: _KindRules(
        Order, "id", True, frozenset({"items", "total", "timestamp", "waiter"})
    ),
    EntityKind.TRANSACTION: _KindRules(FinancialTransaction, "id", True),
    EntityKind.PROFILE: _KindRules(UserProfile, None, False),
    EntityKind.ROLE: _KindRules(RoleAssignment, "principal", False),
}


@dataclass(frozen=True)
class StoreSnapshot:
    """Every collection as of one instant, as (key, entity) pairs ordered by key."""
    collections: Mapping[EntityKind, tuple[tuple[Hashable, Any], ...]]

    def entries(self, kind: EntityKind) -> tuple[tuple[Hashable, Any], ...]:
        return self.collections[kind]

    def all(self, kind: EntityKind) -> tuple[Any, ...]:
        return tuple(entity for _, entity in self.collections[kind])

    @property
    def orders(self) -> tuple[Order, ...]:
        return self.all(EntityKind.ORDER)

    @property
    def transactions(self) -> tuple[FinancialTransaction, ...]:
        return self.all(EntityKind.TRANSACTION)


def _describe(exc: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'value'}: {err['msg']}"
        for err in exc.errors()
    )


class EntityStore:
    """Authoritative owner of every domain entity."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._rows: dict[EntityKind, dict[Hashable, Any]] = {kind: {} for kind in EntityKind}
        self._next_id: dict[EntityKind, int] = {
            kind: 1 for kind, rules in _RULES.items() if rules.generated
        }

    def atomic(self):
        """Hold the store lock across several calls: `with store.atomic(): ...`"""
        return self._lock

    # --- reads -----------------------------------------------------------

    def get(self, kind: EntityKind, key: Hashable) -> Any | None:
        with self._lock:
            return self._rows[kind].get(key)

    def require(self, kind: EntityKind, key: Hashable) -> Any:
        entity = self.get(kind, key)
        if entity is None:
            raise NotFoundError(kind.value, key)
        return entity

    def exists(self, kind: EntityKind, key: Hashable) -> bool:
        with self._lock:
            return key in self._rows[kind]

    def list_all(self, kind: EntityKind) -> tuple[Any, ...]:
        with self._lock:
            rows = self._rows[kind]
            return tuple(rows[key] for key in sorted(rows))

    def entries(self, kind: EntityKind) -> tuple[tuple[Hashable, Any], ...]:
        with self._lock:
            rows = self._rows[kind]
            return tuple((key, rows[key]) for key in sorted(rows))

    def count(self, kind: EntityKind) -> int:
        with self._lock:
            return len(self._rows[kind])

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(
                collections=MappingProxyType({kind: self.entries(kind) for kind in EntityKind})
            )

    # --- writes ----------------------------------------------------------

    def create(self, kind: EntityKind, fields: Mapping[str, Any]) -> Hashable:
        """Insert a new entity and return its key. Natural keys must be unused."""
        rules = _RULES[kind]
        if rules.key_field is None:
            raise ValidationError(f"{kind.value} entries are keyed externally; use put()")

        with self._lock:
            data = dict(fields)
            if rules.generated:
                data[rules.key_field] = self._next_id[kind]

            entity = self._build(kind, data)
            # natural keys are compared after validation has coerced them
            key = getattr(entity, rules.key_field)
            if key in self._rows[kind]:
                raise ValidationError(f"{kind.value} {key!r} already exists")
            self._check_references(kind, entity)
            self._rows[kind][key] = entity
            if rules.generated:
                self._next_id[kind] = key + 1

        logger.debug("Created %s %r", kind.value, key)
        return key

    def put(self, kind: EntityKind, key: Hashable, fields: Mapping[str, Any]) -> Any:
        """Insert or replace the entity stored under an externally chosen key."""
        rules = _RULES[kind]
        if rules.generated:
            raise ValidationError(f"{kind.value} ids are generated; use create()")

        data = dict(fields)
        if rules.key_field is not None:
            data[rules.key_field] = key

        with self._lock:
            entity = self._build(kind, data)
            if rules.key_field is not None:
                key = getattr(entity, rules.key_field)
            self._check_references(kind, entity)
            self._rows[kind][key] = entity

        logger.debug("Stored %s %r", kind.value, key)
        return entity

    def update(self, kind: EntityKind, key: Hashable, mutation: Mutation) -> Any:
        """
        Apply `mutation` to the current entity atomically.

        The mutation receives the current snapshot and returns the changed
        fields. Anything it raises aborts the write.
        """
        rules = _RULES[kind]
        with self._lock:
            current = self._rows[kind].get(key)
            if current is None:
                raise NotFoundError(kind.value, key)

            changes = dict(mutation(current))
            frozen = {name for name in changes if name in rules.immutable or name == rules.key_field}
            if frozen:
                raise ValidationError(
                    f"{kind.value} {key!r}: fields {sorted(frozen)} cannot be changed"
                )

            entity = self._build(kind, {**current.model_dump(), **changes})
            self._check_references(kind, entity)
            self._rows[kind][key] = entity

        logger.debug("Updated %s %r: %s", kind.value, key, sorted(changes))
        return entity

    # --- invariants ------------------------------------------------------

    def _build(self, kind: EntityKind, data: Mapping[str, Any]) -> Any:
        try:
            return _RULES[kind].model.model_validate(dict(data))
        except PydanticValidationError as exc:
            raise ValidationError(f"invalid {kind.value}: {_describe(exc)}") from exc

    def _check_references(self, kind: EntityKind, entity: Any) -> None:
        if kind is EntityKind.INVENTORY_ITEM and entity.supplier_id is not None:
            self._require_reference(EntityKind.SUPPLIER, entity.supplier_id, kind)
        elif kind is EntityKind.ORDER:
            if entity.table_number is not None:
                self._require_reference(EntityKind.TABLE, entity.table_number, kind)
            for item in entity.items:
                self._require_reference(EntityKind.MENU_ITEM, item.menu_item_id, kind)
        elif kind is EntityKind.TRANSACTION and entity.order_id is not None:
            self._require_reference(EntityKind.ORDER, entity.order_id, kind)

    def _require_reference(self, target: EntityKind, key: Hashable, source: EntityKind) -> None:
        if key not in self._rows[target]:
            raise ValidationError(f"{source.value} references unknown {target.value} {key!r}")
