"""Report aggregation package."""

from finance_ledger.queries.aggregator import (
    category_totals,
    group_expenses_by_category,
    period_summary,
)

__all__ = ["category_totals", "group_expenses_by_category", "period_summary"]
