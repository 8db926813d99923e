"""
Data Models Package

This package contains all Pydantic models used by the finance ledger.
Everything the core hands out is one of these frozen snapshots.
"""

from finance_ledger.models.transaction import (
    DEBT_FROM_PREFIX,
    ExpenseCategory,
    LedgerState,
    SplitResult,
    Transaction,
    TransactionType,
    default_description,
)
from finance_ledger.models.reports import (
    ALL_CATEGORIES,
    CategoryBreakdown,
    CategoryTotal,
    PeriodSummary,
    TimeRange,
    TimeSeries,
)
from finance_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "DEBT_FROM_PREFIX",
    "ExpenseCategory",
    "LedgerState",
    "SplitResult",
    "Transaction",
    "TransactionType",
    "default_description",
    # Report models
    "ALL_CATEGORIES",
    "CategoryBreakdown",
    "CategoryTotal",
    "PeriodSummary",
    "TimeRange",
    "TimeSeries",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
