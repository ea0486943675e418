"""
Restaurant Ops — Table routes
"""
from fastapi import APIRouter, Depends, HTTPException, status

from restopos.api.deps import get_caller, get_restaurant
from restopos.models.table import Table
from restopos.ops.restaurant import RestaurantOperations
from restopos.schemas.restaurant import TableCreate, TableStatusUpdate

router = APIRouter(prefix="/tables", tags=["tables"])


@router.get("", response_model=list[Table])
async def list_tables(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return ops.list_tables(caller)


@router.post("", response_model=Table, status_code=status.HTTP_201_CREATED)
async def add_table(
    payload: TableCreate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    return ops.add_table(caller, payload.number, payload.capacity)


@router.get("/available", response_model=list[Table])
async def list_available_tables(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return ops.available_tables(caller)


@router.get("/{number}", response_model=Table)
async def get_table(
    number: int,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    table = ops.get_table(caller, number)
    if table is None:
        raise HTTPException(status_code=404, detail="Table not found.")
    return table


@router.put("/{number}/status", response_model=Table)
async def update_table_status(
    number: int,
    payload: TableStatusUpdate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    return ops.update_table_status(caller, number, payload.status)
