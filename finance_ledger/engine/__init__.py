"""Balance and time-bucketing engines."""

from finance_ledger.engine.balance import compute_balances, net_balance
from finance_ledger.engine.bucketing import (
    build_time_series,
    bucket_label,
    bucket_labels,
    filter_transactions,
    range_start,
    week_of_month,
)

__all__ = [
    "build_time_series",
    "bucket_label",
    "bucket_labels",
    "compute_balances",
    "filter_transactions",
    "net_balance",
    "range_start",
    "week_of_month",
]
