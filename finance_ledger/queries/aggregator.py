"""
Category Aggregation

DESIGN DECISION: Aggregation is DETERMINISTIC and read-only.
It works on whatever snapshot of transactions it is given and never
writes back to the store.

Colour and legend assignment per category is left to the presentation
layer; this module only produces numbers.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from finance_ledger.engine.bucketing import filter_transactions
from finance_ledger.models.reports import (
    CategoryBreakdown,
    CategoryTotal,
    PeriodSummary,
    TimeRange,
)
from finance_ledger.models.transaction import (
    ExpenseCategory,
    Transaction,
    TransactionType,
)


def group_expenses_by_category(
    transactions: Iterable[Transaction],
) -> dict[ExpenseCategory, Decimal]:
    """Sum expense amounts per category; every category gets a key."""
    groups = {category: Decimal("0") for category in ExpenseCategory}

    for transaction in transactions:
        if transaction.type == TransactionType.EXPENSE and transaction.category:
            groups[transaction.category] += transaction.amount

    return groups


def category_totals(
    transactions: Iterable[Transaction],
    time_range: TimeRange,
    now: datetime,
    category_filter: Optional[ExpenseCategory] = None,
) -> CategoryBreakdown:
    """
    Expense distribution over the window.

    Categories that sum to zero are left out, so the consumer can render
    every entry it gets.
    """
    filtered = filter_transactions(transactions, time_range, now, category_filter)
    groups = group_expenses_by_category(filtered)

    entries = tuple(
        CategoryTotal(category=category, amount=amount)
        for category, amount in groups.items()
        if amount > 0
    )

    return CategoryBreakdown(
        time_range=time_range,
        category_filter=category_filter,
        entries=entries,
    )


def period_summary(
    transactions: Iterable[Transaction],
    time_range: TimeRange,
    now: datetime,
    category_filter: Optional[ExpenseCategory] = None,
) -> PeriodSummary:
    """
    Totals per transaction type over the window.

    With a category filter only expenses survive filtering, so income,
    debt and loan payments all read zero.
    """
    totals = {t: Decimal("0") for t in TransactionType}
    for transaction in filter_transactions(transactions, time_range, now, category_filter):
        totals[transaction.type] += transaction.amount

    return PeriodSummary(
        time_range=time_range,
        category_filter=category_filter,
        total_income=totals[TransactionType.INCOME],
        total_expenses=totals[TransactionType.EXPENSE],
        new_debt=totals[TransactionType.DEBT],
        loan_payments=totals[TransactionType.LOAN_PAYMENT],
    )
