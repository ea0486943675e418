"""
Restaurant Ops — Transactions and financial reports
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from restopos.api.deps import get_caller, get_restaurant
from restopos.models.finance import FinancialTransaction
from restopos.ops.reports import FinancialReport, ReportPeriod
from restopos.ops.restaurant import RestaurantOperations
from restopos.schemas.restaurant import TransactionCreate

router = APIRouter(prefix="/transactions", tags=["transactions"])
reports_router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=list[FinancialTransaction])
async def list_transactions(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return ops.list_transactions(caller)


@router.post("", response_model=FinancialTransaction, status_code=status.HTTP_201_CREATED)
async def record_transaction(
    payload: TransactionCreate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    txn_id = ops.record_transaction(caller, payload.amount, payload.payment_method, payload.order_id)
    return ops.get_transaction(caller, txn_id)


@router.get("/{txn_id}", response_model=FinancialTransaction)
async def get_transaction(
    txn_id: int,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    txn = ops.get_transaction(caller, txn_id)
    if txn is None:
        raise HTTPException(status_code=404, detail="Transaction not found.")
    return txn


@reports_router.get("/financial", response_model=FinancialReport)
async def financial_report(
    period: ReportPeriod = Query(ReportPeriod.DAILY, description="daily, weekly or monthly"),
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    """Revenue, completed orders and payment-method split over a rolling window."""
    return ops.financial_report(caller, period)
