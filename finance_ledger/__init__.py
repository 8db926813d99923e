"""
Finance Ledger - Source Package

The core of a personal finance tracker: an ordered ledger of income,
expense, debt and loan-payment entries, the balances derived from it,
and the time and category aggregates behind its charts.

DESIGN PRINCIPLES:
1. Balances are always a full recompute, never a running total
2. Reject bad input before touching state
3. Money is Decimal, never float
4. Every mutation is auditable
5. Presentation lives outside the core
"""

from finance_ledger.engine import build_time_series, compute_balances
from finance_ledger.ledger import LedgerStore
from finance_ledger.models import (
    CategoryBreakdown,
    ExpenseCategory,
    LedgerState,
    PeriodSummary,
    SplitResult,
    TimeRange,
    TimeSeries,
    Transaction,
    TransactionType,
)
from finance_ledger.orchestrator import FinanceTracker, create_app_components
from finance_ledger.queries import category_totals, period_summary
from finance_ledger.validation import (
    InvalidAmountError,
    InvalidCategoryError,
    InvalidTimeRangeError,
    LedgerError,
    NotFoundError,
    PaymentExceedsLoanError,
    UnknownTransactionTypeError,
)

__version__ = "1.0.0"

__all__ = [
    "CategoryBreakdown",
    "ExpenseCategory",
    "FinanceTracker",
    "InvalidAmountError",
    "InvalidCategoryError",
    "InvalidTimeRangeError",
    "LedgerError",
    "LedgerState",
    "LedgerStore",
    "NotFoundError",
    "PaymentExceedsLoanError",
    "PeriodSummary",
    "SplitResult",
    "TimeRange",
    "TimeSeries",
    "Transaction",
    "TransactionType",
    "UnknownTransactionTypeError",
    "build_time_series",
    "category_totals",
    "compute_balances",
    "create_app_components",
    "period_summary",
]
