"""Audit logging package."""

from finance_ledger.audit.logger import (
    AuditLogger,
    configure_logging,
    create_correlation_id,
)
from finance_ledger.audit.storage import (
    AuditStorageError,
    AuditStorageInterface,
    InMemoryAuditStorage,
)

__all__ = [
    "AuditLogger",
    "AuditStorageError",
    "AuditStorageInterface",
    "InMemoryAuditStorage",
    "configure_logging",
    "create_correlation_id",
]
