"""
Restaurant Ops — Menu routes
"""
from fastapi import APIRouter, Depends, HTTPException, status

from restopos.api.deps import get_caller, get_restaurant
from restopos.models.menu import MenuItem
from restopos.ops.restaurant import RestaurantOperations
from restopos.schemas.restaurant import AvailabilityUpdate, MenuItemCreate, MenuItemUpdate

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("", response_model=list[MenuItem])
async def list_menu_items(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return ops.list_menu_items(caller)


@router.post("", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
async def add_menu_item(
    payload: MenuItemCreate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    item_id = ops.add_menu_item(caller, payload.name, payload.category, payload.price)
    return ops.get_menu_item(caller, item_id)


@router.get("/available", response_model=list[MenuItem])
async def list_available_menu_items(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    """Items a waiter can put on a new order."""
    return ops.available_menu_items(caller)


@router.get("/{menu_item_id}", response_model=MenuItem)
async def get_menu_item(
    menu_item_id: int,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    item = ops.get_menu_item(caller, menu_item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found.")
    return item


@router.patch("/{menu_item_id}", response_model=MenuItem)
async def update_menu_item(
    menu_item_id: int,
    payload: MenuItemUpdate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    return ops.update_menu_item(
        caller, menu_item_id, name=payload.name, category=payload.category, price=payload.price
    )


@router.put("/{menu_item_id}/availability", response_model=MenuItem)
async def update_menu_item_availability(
    menu_item_id: int,
    payload: AvailabilityUpdate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    return ops.update_menu_item_availability(caller, menu_item_id, payload.available)
