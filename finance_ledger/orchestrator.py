"""
Main Orchestrator for the Finance Ledger

This module ties the components together behind the inbound contract
the presentation layer calls:
1. Mutations (add / edit / delete) go through the ledger store
2. Queries (balances, time series, category totals, summary) run on a
   snapshot of the store

DESIGN DECISION: The orchestrator enforces the boundaries:
- Raw user input is parsed here or in the store, never trusted
- Every mutation and every rejection is audited
- Callers only receive frozen snapshots
"""

from datetime import datetime
from typing import Callable, Optional, Union
from uuid import UUID

from finance_ledger.audit import (
    AuditLogger,
    InMemoryAuditStorage,
    configure_logging,
    create_correlation_id,
)
from finance_ledger.config import LedgerSettings, Settings, get_settings
from finance_ledger.engine.bucketing import build_time_series
from finance_ledger.ledger import LedgerStore, TransactionId
from finance_ledger.models.reports import (
    ALL_CATEGORIES,
    CategoryBreakdown,
    PeriodSummary,
    TimeRange,
    TimeSeries,
)
from finance_ledger.models.transaction import (
    ExpenseCategory,
    LedgerState,
    SplitResult,
    Transaction,
    TransactionType,
)
from finance_ledger.queries import category_totals, period_summary
from finance_ledger.validation import (
    InvalidAmountError,
    LedgerError,
    NotFoundError,
    PaymentExceedsLoanError,
    parse_category_filter,
    parse_time_range,
)
from finance_ledger.validation.validator import AmountInput


CategoryFilter = Union[ExpenseCategory, str, None]


def _as_uuid(value: object) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class FinanceTracker:
    """
    Facade over the ledger store, engines and aggregators.

    Flow for a mutation:
    1. Parse and validate (store)
    2. Mutate and recompute balances (store)
    3. Audit the outcome, success or rejection

    Single-writer: the presentation layer serialises calls.
    """

    def __init__(
        self,
        store: Optional[LedgerStore] = None,
        audit_logger: Optional[AuditLogger] = None,
        ledger_settings: Optional[LedgerSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._clock = clock
        self._store = store if store is not None else LedgerStore(clock=clock)
        self._audit_logger = audit_logger
        self._settings = ledger_settings or get_settings().ledger

    @property
    def store(self) -> LedgerStore:
        return self._store

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        transaction_type: Union[TransactionType, str],
        amount_text: AmountInput,
        description: str = "",
        category: CategoryFilter = None,
        correlation_id: Optional[UUID] = None,
    ) -> Union[Transaction, SplitResult]:
        """
        Record a transaction from raw form input.

        Returns:
            The new Transaction, or a SplitResult when an expense exceeded
            the cash in hand

        Raises:
            LedgerError: The request was rejected; nothing was recorded
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            result = self._store.add(transaction_type, amount_text, description, category)
        except LedgerError as e:
            self._audit_rejection(e, correlation_id)
            raise

        if self._audit_logger is not None:
            if isinstance(result, SplitResult):
                self._audit_logger.log_expense_split(result, correlation_id)
            else:
                self._audit_logger.log_transaction_added(result, correlation_id)

        return result

    def edit_transaction(
        self,
        transaction_id: TransactionId,
        amount_text: AmountInput,
        description: str = "",
        category: CategoryFilter = None,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Replace amount, description and (expenses only) category.

        Raises:
            LedgerError: The request was rejected; nothing changed
        """
        correlation_id = correlation_id or create_correlation_id()
        before = self._store.get(transaction_id)

        try:
            updated = self._store.edit(transaction_id, amount_text, description, category)
        except LedgerError as e:
            self._audit_rejection(e, correlation_id)
            raise

        if self._audit_logger is not None:
            self._audit_logger.log_transaction_edited(before, updated, correlation_id)

        return updated

    def delete_transaction(
        self,
        transaction_id: TransactionId,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Delete a transaction. Unknown ids are a no-op, never an error."""
        correlation_id = correlation_id or create_correlation_id()
        existing = self._store.get(transaction_id)

        self._store.delete(transaction_id)

        if self._audit_logger is None:
            return
        if existing is None:
            self._audit_logger.log_delete_target_missing(
                _as_uuid(transaction_id), correlation_id
            )
        else:
            self._audit_logger.log_transaction_deleted(existing, correlation_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def query_balances(self) -> LedgerState:
        return self._store.state

    def transactions(self) -> tuple[Transaction, ...]:
        return self._store.transactions

    def recent_transactions(self, limit: Optional[int] = None) -> tuple[Transaction, ...]:
        """Most recent transactions for the dashboard list."""
        if limit is None:
            limit = self._settings.recent_transactions_limit
        return self._store.recent(limit)

    def query_time_series(
        self,
        time_range: Union[TimeRange, str],
        category_filter: CategoryFilter = ALL_CATEGORIES,
        correlation_id: Optional[UUID] = None,
    ) -> TimeSeries:
        """Income vs expense series for the chart."""
        correlation_id = correlation_id or create_correlation_id()
        window, category = self._parse_report_args(time_range, category_filter, correlation_id)

        series = build_time_series(
            self._store.transactions,
            window,
            self._clock(),
            category_filter=category,
            drop_unmatched=self._settings.drop_unmatched_bucket_labels,
        )

        if self._audit_logger is not None:
            self._audit_logger.log_report_generated(
                "time_series",
                window,
                correlation_id,
                labels=len(series.labels),
                dropped_count=series.dropped_count,
            )

        return series

    def query_category_totals(
        self,
        time_range: Union[TimeRange, str],
        category_filter: CategoryFilter = ALL_CATEGORIES,
        correlation_id: Optional[UUID] = None,
    ) -> CategoryBreakdown:
        """Expense distribution by category for the analytics view."""
        correlation_id = correlation_id or create_correlation_id()
        window, category = self._parse_report_args(time_range, category_filter, correlation_id)

        breakdown = category_totals(
            self._store.transactions, window, self._clock(), category
        )

        if self._audit_logger is not None:
            self._audit_logger.log_report_generated(
                "category_totals",
                window,
                correlation_id,
                categories=len(breakdown.entries),
            )

        return breakdown

    def query_period_summary(
        self,
        time_range: Union[TimeRange, str],
        category_filter: CategoryFilter = ALL_CATEGORIES,
        correlation_id: Optional[UUID] = None,
    ) -> PeriodSummary:
        """Totals per type for the financial summary panel."""
        correlation_id = correlation_id or create_correlation_id()
        window, category = self._parse_report_args(time_range, category_filter, correlation_id)

        summary = period_summary(
            self._store.transactions, window, self._clock(), category
        )

        if self._audit_logger is not None:
            self._audit_logger.log_report_generated("period_summary", window, correlation_id)

        return summary

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _parse_report_args(
        self,
        time_range: Union[TimeRange, str],
        category_filter: CategoryFilter,
        correlation_id: UUID,
    ) -> tuple[TimeRange, Optional[ExpenseCategory]]:
        try:
            return parse_time_range(time_range), parse_category_filter(category_filter)
        except LedgerError as e:
            self._audit_rejection(e, correlation_id)
            raise

    def _audit_rejection(self, error: LedgerError, correlation_id: UUID) -> None:
        if self._audit_logger is None:
            return

        if isinstance(error, InvalidAmountError):
            self._audit_logger.log_amount_rejected(
                error.raw_amount, error.reason, correlation_id
            )
        elif isinstance(error, PaymentExceedsLoanError):
            self._audit_logger.log_payment_rejected(
                error.requested, error.outstanding, correlation_id
            )
        elif isinstance(error, NotFoundError):
            self._audit_logger.log_edit_target_missing(
                _as_uuid(error.transaction_id), correlation_id
            )
        else:
            self._audit_logger.log_input_rejected(
                error.field, error.message, correlation_id
            )


def create_app_components(
    settings: Optional[Settings] = None,
    keep_audit_trail: bool = True,
    clock: Callable[[], datetime] = datetime.now,
) -> tuple[FinanceTracker, Optional[InMemoryAuditStorage]]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (the cached ones if None)
        keep_audit_trail: Keep audit events in memory in addition to
                         the structured log. False gives local-only logging.
        clock: Source of "now" for timestamps and report windows

    Returns:
        (finance_tracker, audit_storage)
    """
    settings = settings or get_settings()
    log_settings = settings.logging
    configure_logging(log_settings.level, log_settings.json_logs)

    audit_storage = InMemoryAuditStorage() if keep_audit_trail else None
    audit_logger = AuditLogger(audit_storage)

    tracker = FinanceTracker(
        store=LedgerStore(clock=clock),
        audit_logger=audit_logger,
        ledger_settings=settings.ledger,
        clock=clock,
    )

    return tracker, audit_storage
