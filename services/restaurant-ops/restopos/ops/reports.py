"""
Restaurant Ops — Financial reporting

Pure aggregation over a store snapshot. Periods are rolling windows that
end at the evaluation instant (not calendar days):
  daily   = last 24h
  weekly  = last 7 days
  monthly = last 30 days
Both window ends are inclusive.
"""
from collections import defaultdict
from enum import Enum as PyEnum
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from restopos.models.finance import FinancialTransaction
from restopos.models.order import Order, OrderStatus

NS_PER_DAY = 24 * 60 * 60 * 1_000_000_000


class ReportPeriod(str, PyEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def window_ns(self) -> int:
        return _WINDOW_DAYS[self] * NS_PER_DAY


_WINDOW_DAYS = {ReportPeriod.DAILY: 1, ReportPeriod.WEEKLY: 7, ReportPeriod.MONTHLY: 30}


class PaymentMethodShare(BaseModel):
    model_config = ConfigDict(frozen=True)

    payment_method: str
    revenue: int
    percentage: float


class FinancialReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: ReportPeriod
    window_start: int
    window_end: int
    total_revenue: int
    completed_orders: int
    average_order_value: int
    payment_methods: list[PaymentMethodShare]
    transactions: list[FinancialTransaction]


def _average(total: int, count: int) -> int:
    if count == 0:
        return 0
    # half-up rounding on non-negative minor units
    return (2 * total + count) // (2 * count)


def build_report(
    orders: Iterable[Order],
    transactions: Iterable[FinancialTransaction],
    period: ReportPeriod,
    now: int,
) -> FinancialReport:
    start = now - period.window_ns

    def in_window(timestamp: int) -> bool:
        return start <= timestamp <= now

    window_txns = sorted(
        (t for t in transactions if in_window(t.timestamp)),
        key=lambda t: (t.timestamp, t.id),
        reverse=True,
    )
    completed = sum(
        1 for o in orders if in_window(o.timestamp) and o.status is OrderStatus.COMPLETED
    )
    revenue = sum(t.amount for t in window_txns)

    by_method: dict[str, int] = defaultdict(int)
    for txn in window_txns:
        by_method[txn.payment_method] += txn.amount

    shares = [
        PaymentMethodShare(
            payment_method=method,
            revenue=amount,
            percentage=(amount / revenue * 100.0) if revenue else 0.0,
        )
        for method, amount in sorted(by_method.items(), key=lambda kv: (-kv[1], kv[0]))
    ]

    return FinancialReport(
        period=period,
        window_start=start,
        window_end=now,
        total_revenue=revenue,
        completed_orders=completed,
        average_order_value=_average(revenue, completed),
        payment_methods=shares,
        transactions=window_txns,
    )
