"""
Audit Logger

DESIGN DECISION: Every mutation and every rejected request is logged.
This provides:
1. Traceability of how the balances came to be
2. Debugging capability
3. A history the user can be shown

The audit logger:
- Is synchronous (the ledger core has no suspension points)
- Gracefully handles storage failures (never breaks a ledger operation)
- Supports correlation IDs to tie related events together
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finance_ledger.audit.storage import AuditStorageInterface
from finance_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finance_ledger.models.reports import TimeRange
from finance_ledger.models.transaction import SplitResult, Transaction


def _configure_structlog(json_logs: bool) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    _configure_structlog(json_logs)


# Configure structlog for local logging
_configure_structlog(json_logs=True)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend (for the user-visible history)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for the audit trail.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transaction_added(
        self,
        transaction: Transaction,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.transaction_added(transaction, correlation_id))

    def log_expense_split(
        self,
        split: SplitResult,
        correlation_id: UUID,
    ) -> None:
        """Log the split itself, then each leg under the same correlation id."""
        self.log(AuditEventBuilder.expense_split(split, correlation_id))
        for leg in split.transactions:
            self.log_transaction_added(leg, correlation_id)

    def log_transaction_edited(
        self,
        before: Transaction,
        after: Transaction,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.transaction_edited(before, after, correlation_id))

    def log_transaction_deleted(
        self,
        transaction: Transaction,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.transaction_deleted(transaction, correlation_id))

    def log_delete_target_missing(
        self,
        transaction_id: Optional[UUID],
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.delete_target_missing(transaction_id, correlation_id))

    def log_amount_rejected(
        self,
        raw_amount: object,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.amount_rejected(str(raw_amount), reason, correlation_id))

    def log_payment_rejected(
        self,
        requested: object,
        outstanding: object,
        correlation_id: UUID,
    ) -> None:
        self.log(
            AuditEventBuilder.payment_rejected(str(requested), str(outstanding), correlation_id)
        )

    def log_edit_target_missing(
        self,
        transaction_id: Optional[UUID],
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.edit_target_missing(transaction_id, correlation_id))

    def log_input_rejected(
        self,
        field: str,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.input_rejected(field, reason, correlation_id))

    def log_report_generated(
        self,
        report: str,
        time_range: TimeRange,
        correlation_id: UUID,
        **details,
    ) -> None:
        self.log(
            AuditEventBuilder.report_generated(report, time_range, details, correlation_id)
        )

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(
            AuditEventBuilder.system_error(
                error_type=error_type,
                error_message=error_message,
                details=details,
                correlation_id=correlation_id,
            )
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., adding an expense).
    Pass it through all subsequent operations.
    """
    return uuid4()
