"""
Report Models

Immutable snapshots handed to the presentation layer.
Charts, legends and colours are built from these outside the core.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_ledger.models.transaction import ExpenseCategory


class TimeRange(str, Enum):
    """Reporting window selector."""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


ALL_CATEGORIES = "all"


class TimeSeries(BaseModel):
    """
    Income and expense totals per bucket label.

    `labels`, `income` and `expenses` always have the same length and
    are aligned index by index.
    """
    model_config = ConfigDict(frozen=True)

    time_range: TimeRange
    labels: tuple[str, ...] = Field(
        ...,
        description="Bucket labels in display order"
    )
    income: tuple[Decimal, ...] = Field(
        ...,
        description="Income total per label"
    )
    expenses: tuple[Decimal, ...] = Field(
        ...,
        description="Expense total per label"
    )
    dropped_count: int = Field(
        default=0,
        ge=0,
        description="Transactions whose bucket label was not generated"
    )

    @property
    def has_data(self) -> bool:
        """True when at least one point is non-zero."""
        return any(v > 0 for v in self.income) or any(v > 0 for v in self.expenses)

    def as_rows(self) -> list[dict]:
        """One dict per label, for table or chart consumers."""
        return [
            {"label": label, "income": inc, "expenses": exp}
            for label, inc, exp in zip(self.labels, self.income, self.expenses)
        ]


class CategoryTotal(BaseModel):
    """Expense total for a single category."""
    model_config = ConfigDict(frozen=True)

    category: ExpenseCategory
    amount: Decimal


class CategoryBreakdown(BaseModel):
    """
    Expense distribution by category.

    Only categories with a non-zero total are present, in category order.
    """
    model_config = ConfigDict(frozen=True)

    time_range: TimeRange
    category_filter: Optional[ExpenseCategory] = Field(
        default=None,
        description="None means all categories"
    )
    entries: tuple[CategoryTotal, ...] = Field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        return sum((e.amount for e in self.entries), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def as_dict(self) -> dict[ExpenseCategory, Decimal]:
        """A fresh mapping; changing it does not touch the snapshot."""
        return {e.category: e.amount for e in self.entries}


class PeriodSummary(BaseModel):
    """Totals per transaction type over a reporting window."""
    model_config = ConfigDict(frozen=True)

    time_range: TimeRange
    category_filter: Optional[ExpenseCategory] = None
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    new_debt: Decimal = Decimal("0")
    loan_payments: Decimal = Decimal("0")
