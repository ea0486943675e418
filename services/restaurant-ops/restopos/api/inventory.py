"""
Restaurant Ops — Inventory and supplier routes
"""
from fastapi import APIRouter, Depends, HTTPException, status

from restopos.api.deps import get_caller, get_restaurant
from restopos.models.inventory import Supplier
from restopos.ops.restaurant import RestaurantOperations
from restopos.schemas.restaurant import (
    InventoryItemCreate,
    InventoryItemView,
    QuantityUpdate,
    SupplierCreate,
)

router = APIRouter(prefix="/inventory", tags=["inventory"])
suppliers_router = APIRouter(prefix="/suppliers", tags=["inventory"])


@router.get("", response_model=list[InventoryItemView])
async def list_inventory(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return [InventoryItemView.of(item) for item in ops.list_inventory_items(caller)]


@router.post("", response_model=InventoryItemView, status_code=status.HTTP_201_CREATED)
async def add_inventory_item(
    payload: InventoryItemCreate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    item_id = ops.add_inventory_item(
        caller,
        payload.name,
        payload.supplier_id,
        payload.low_stock_threshold,
        quantity=payload.quantity,
    )
    return InventoryItemView.of(ops.get_inventory_item(caller, item_id))


@router.get("/low-stock", response_model=list[InventoryItemView])
async def list_low_stock(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    """Items whose quantity is strictly below their threshold."""
    return [InventoryItemView.of(item) for item in ops.low_stock_items(caller)]


@router.get("/{item_id}", response_model=InventoryItemView)
async def get_inventory_item(
    item_id: int,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    item = ops.get_inventory_item(caller, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Inventory item not found.")
    return InventoryItemView.of(item)


@router.put("/{item_id}/quantity", response_model=InventoryItemView)
async def update_inventory_quantity(
    item_id: int,
    payload: QuantityUpdate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    return InventoryItemView.of(ops.update_inventory_quantity(caller, item_id, payload.quantity))


@suppliers_router.get("", response_model=list[Supplier])
async def list_suppliers(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return ops.list_suppliers(caller)


@suppliers_router.post("", response_model=Supplier, status_code=status.HTTP_201_CREATED)
async def add_supplier(
    payload: SupplierCreate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    supplier_id = ops.add_supplier(caller, payload.name, payload.contact_info)
    return ops.get_supplier(caller, supplier_id)


@suppliers_router.get("/{supplier_id}", response_model=Supplier)
async def get_supplier(
    supplier_id: int,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    supplier = ops.get_supplier(caller, supplier_id)
    if supplier is None:
        raise HTTPException(status_code=404, detail="Supplier not found.")
    return supplier
