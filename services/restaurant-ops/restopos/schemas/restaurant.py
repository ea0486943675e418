"""
Restaurant Ops — Pydantic request/response schemas

Entities themselves are returned as-is; these cover request bodies and
the few responses that reshape an entity.
"""
from pydantic import BaseModel, Field

from restopos.models.inventory import InventoryItem
from restopos.models.order import OrderStatus
from restopos.models.table import TableStatus
from restopos.models.user import RestaurantRole, UserRole
from restopos.ops.inventory import is_low_stock


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100, examples=["main"])
    price: int = Field(..., examples=[1250])  # minor units


class MenuItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1, max_length=100)
    price: int | None = None


class AvailabilityUpdate(BaseModel):
    available: bool


class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact_info: str = Field("", max_length=500)


class InventoryItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    supplier_id: int | None = None
    low_stock_threshold: int
    quantity: int = 0


class QuantityUpdate(BaseModel):
    quantity: int


class InventoryItemView(InventoryItem):
    low_stock: bool

    @classmethod
    def of(cls, item: InventoryItem) -> "InventoryItemView":
        return cls(**item.model_dump(), low_stock=is_low_stock(item))


class TableCreate(BaseModel):
    number: int
    capacity: int


class TableStatusUpdate(BaseModel):
    status: TableStatus


class OrderItemRequest(BaseModel):
    menu_item_id: int = Field(..., examples=[1])
    quantity: int


class OrderRequest(BaseModel):
    table_number: int | None = None
    items: list[OrderItemRequest]


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class TransactionCreate(BaseModel):
    amount: int
    payment_method: str = Field(..., max_length=100, examples=["Cash"])
    order_id: int | None = None


class ProfileUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    restaurant_role: RestaurantRole | None = None


class StaffCreate(BaseModel):
    principal: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: RestaurantRole


class StaffUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: RestaurantRole


class StaffMember(BaseModel):
    principal: str
    name: str
    restaurant_role: RestaurantRole | None


class SystemRoleUpdate(BaseModel):
    role: UserRole


class CallerRole(BaseModel):
    principal: str
    role: UserRole
    is_admin: bool


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    dependencies: dict[str, str]
