"""
Time-Bucketing Engine

Turns the transaction list into the income/expense series behind the
"Income vs Expenses" chart:

1. Pick the window start for the time range
2. Keep transactions dated on or after it
3. Generate the bucket labels for the range
4. Assign every income/expense transaction to a label by its own date

Labels are fixed English abbreviations, never locale-dependent strftime
output, so the same ledger always charts the same way.
"""

import calendar
import math
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from finance_ledger.models.reports import TimeRange, TimeSeries
from finance_ledger.models.transaction import (
    ExpenseCategory,
    Transaction,
    TransactionType,
)


WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
WEEKS_PER_MONTH = 4
DAYS_PER_WEEK = 7

EPOCH = datetime(1970, 1, 1)


def shift_months(moment: datetime, months: int) -> datetime:
    """
    Move a datetime by whole calendar months.

    The day is clamped to the target month's length (Mar 31 minus one
    month is Feb 28/29).
    """
    index = moment.year * 12 + (moment.month - 1) + months
    year, month_zero = divmod(index, 12)
    month = month_zero + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def range_start(time_range: TimeRange, now: datetime) -> datetime:
    """First moment (inclusive) of the reporting window ending at `now`."""
    if time_range == TimeRange.WEEK:
        return now - timedelta(days=DAYS_PER_WEEK)
    if time_range == TimeRange.MONTH:
        return shift_months(now, -1)
    if time_range == TimeRange.YEAR:
        return shift_months(now, -12)
    return EPOCH.replace(tzinfo=now.tzinfo)


def filter_transactions(
    transactions: Iterable[Transaction],
    time_range: TimeRange,
    now: datetime,
    category_filter: Optional[ExpenseCategory] = None,
) -> list[Transaction]:
    """
    Transactions inside the window.

    A category filter narrows the result to expenses of that category;
    it is only passed in the analytics context.
    """
    start = range_start(time_range, now)
    kept = [t for t in transactions if t.date >= start]

    if category_filter is not None:
        kept = [
            t for t in kept
            if t.type == TransactionType.EXPENSE and t.category == category_filter
        ]

    return kept


def week_of_month(moment: datetime) -> int:
    """
    Week number used by the month view.

    ceil((day_of_month + day_of_week + 1) / 7) with Sunday as day 0.
    Late days can land on week 5 or 6, which the month view has no label for.
    """
    sunday_based = (moment.weekday() + 1) % DAYS_PER_WEEK
    return math.ceil((moment.day + sunday_based + 1) / DAYS_PER_WEEK)


def bucket_labels(time_range: TimeRange, now: datetime) -> tuple[str, ...]:
    """Labels for the range, oldest first."""
    if time_range == TimeRange.WEEK:
        return tuple(
            WEEKDAY_LABELS[(now - timedelta(days=offset)).weekday()]
            for offset in range(DAYS_PER_WEEK - 1, -1, -1)
        )
    if time_range == TimeRange.MONTH:
        return tuple(f"Week {i}" for i in range(1, WEEKS_PER_MONTH + 1))
    return MONTH_LABELS


def bucket_label(time_range: TimeRange, moment: datetime) -> str:
    """Label a single date falls under for the given range."""
    if time_range == TimeRange.WEEK:
        return WEEKDAY_LABELS[moment.weekday()]
    if time_range == TimeRange.MONTH:
        return f"Week {week_of_month(moment)}"
    return MONTH_LABELS[moment.month - 1]


def build_time_series(
    transactions: Iterable[Transaction],
    time_range: TimeRange,
    now: datetime,
    category_filter: Optional[ExpenseCategory] = None,
    drop_unmatched: bool = True,
) -> TimeSeries:
    """
    Income and expense totals per bucket label.

    Args:
        transactions: Full transaction list (not mutated)
        time_range: Window and granularity selector
        now: Current wall-clock time
        category_filter: Analytics-only expense category filter
        drop_unmatched: Drop transactions whose label was not generated
            (the long-standing chart behaviour). When False the extra
            labels are appended after the generated ones instead.

    Returns:
        TimeSeries with aligned labels, income and expenses
    """
    labels = list(bucket_labels(time_range, now))
    income = {label: Decimal("0") for label in labels}
    expenses = {label: Decimal("0") for label in labels}
    extra_labels = []
    dropped = 0

    for transaction in filter_transactions(transactions, time_range, now, category_filter):
        if transaction.type not in (TransactionType.INCOME, TransactionType.EXPENSE):
            continue

        label = bucket_label(time_range, transaction.date)
        if label not in income:
            if drop_unmatched:
                dropped += 1
                continue
            extra_labels.append(label)
            income[label] = Decimal("0")
            expenses[label] = Decimal("0")

        if transaction.type == TransactionType.INCOME:
            income[label] += transaction.amount
        else:
            expenses[label] += transaction.amount

    labels.extend(sorted(extra_labels))

    return TimeSeries(
        time_range=time_range,
        labels=tuple(labels),
        income=tuple(income[label] for label in labels),
        expenses=tuple(expenses[label] for label in labels),
        dropped_count=dropped,
    )
