"""
Restaurant Ops — Orders API

Flow:
  1. JWT validated by middleware (request.state.user set)
  2. Caller's restaurant role checked against the permission matrix
  3. Menu prices snapshotted into the order, total frozen
  4. Kitchen and floor staff walk the order through its statuses
Payment is a separate POST /transactions call once the order is completed.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from restopos.api.deps import get_caller, get_restaurant
from restopos.models.order import Order
from restopos.ops.orders import OrderLine
from restopos.ops.restaurant import RestaurantOperations
from restopos.schemas.restaurant import OrderRequest, OrderStatusUpdate

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[Order])
async def list_orders(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return ops.list_orders(caller)


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderRequest,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    """Place an order. The caller is recorded as the order's waiter."""
    lines = [OrderLine(i.menu_item_id, i.quantity) for i in payload.items]
    order_id = ops.create_order(caller, payload.table_number, lines)
    return ops.get_order(caller, order_id)


@router.get("/active", response_model=list[Order])
async def list_active_orders(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    """Every order not yet completed, newest first."""
    return ops.active_orders(caller)


@router.get("/kitchen", response_model=list[Order])
async def kitchen_queue(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    """Kitchen display board — pending and preparing orders, oldest first."""
    return ops.kitchen_queue(caller)


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: int,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    order = ops.get_order(caller, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found.")
    return order


@router.put("/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    return ops.update_order_status(caller, order_id, payload.status)
