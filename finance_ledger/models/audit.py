"""
Audit Models for the Finance Ledger

Every mutation of the ledger, and every rejected request, is logged.
This provides:
1. Traceability of how a balance came to be
2. Debugging information when a request is refused
3. A way to see what an auto-split actually recorded

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from finance_ledger.models.reports import TimeRange
from finance_ledger.models.transaction import SplitResult, Transaction


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Mutations
    TRANSACTION_ADDED = "transaction_added"
    EXPENSE_SPLIT = "expense_split"
    TRANSACTION_EDITED = "transaction_edited"
    TRANSACTION_DELETED = "transaction_deleted"
    DELETE_TARGET_MISSING = "delete_target_missing"

    # Rejections
    AMOUNT_REJECTED = "amount_rejected"
    PAYMENT_REJECTED = "payment_rejected"
    EDIT_TARGET_MISSING = "edit_target_missing"
    INPUT_REJECTED = "input_rejected"

    # Reporting
    REPORT_GENERATED = "report_generated"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'report')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., both legs of a split)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(tx, correlation_id)
        event = AuditEventBuilder.payment_rejected("500", "200", correlation_id)
    """

    @staticmethod
    def transaction_added(
        transaction: Transaction,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction.id,
            correlation_id=correlation_id,
            description=f"Added {transaction.type.value}: {transaction.amount}",
            details=transaction.to_log_dict(),
            is_user_action=True,
        )

    @staticmethod
    def expense_split(
        split: SplitResult,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_SPLIT,
            entity_type="transaction",
            entity_id=split.debt.id,
            correlation_id=correlation_id,
            description=(
                f"Expense of {split.requested_amount} exceeded cash in hand, "
                f"{split.debt.amount} recorded as debt"
            ),
            details={
                "expense": split.expense.to_log_dict() if split.expense else None,
                "debt": split.debt.to_log_dict(),
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_edited(
        before: Transaction,
        after: Transaction,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_EDITED,
            entity_type="transaction",
            entity_id=after.id,
            correlation_id=correlation_id,
            description=f"Edited {after.type.value}: {before.amount} -> {after.amount}",
            details={
                "before": before.to_log_dict(),
                "after": after.to_log_dict(),
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(
        transaction: Transaction,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction.id,
            correlation_id=correlation_id,
            description=f"Deleted {transaction.type.value}: {transaction.amount}",
            details=transaction.to_log_dict(),
            is_user_action=True,
        )

    @staticmethod
    def delete_target_missing(
        transaction_id: Optional[UUID],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_TARGET_MISSING,
            severity=AuditSeverity.DEBUG,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Delete requested for a transaction that does not exist",
            is_user_action=True,
        )

    @staticmethod
    def amount_rejected(
        raw_amount: str,
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AMOUNT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description="Amount rejected",
            details={"raw_amount": raw_amount},
            error_code="invalid_amount",
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def payment_rejected(
        requested: str,
        outstanding: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYMENT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Loan payment of {requested} exceeds outstanding loan of {outstanding}",
            details={
                "requested": requested,
                "outstanding": outstanding,
            },
            error_code="payment_exceeds_loan",
            is_user_action=True,
        )

    @staticmethod
    def edit_target_missing(
        transaction_id: Optional[UUID],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_TARGET_MISSING,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Edit requested for a transaction that does not exist",
            error_code="not_found",
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(
        field: str,
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Invalid {field}",
            details={"field": field},
            error_code="invalid_input",
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def report_generated(
        report: str,
        time_range: TimeRange,
        details: dict,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            severity=(
                AuditSeverity.WARNING if details.get("dropped_count")
                else AuditSeverity.DEBUG
            ),
            entity_type="report",
            correlation_id=correlation_id,
            description=f"Report generated: {report} ({time_range.value})",
            details={"report": report, "time_range": time_range.value, **details},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
