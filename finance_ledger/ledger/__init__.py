"""Ledger store package."""

from finance_ledger.ledger.store import LedgerStore, TransactionId

__all__ = ["LedgerStore", "TransactionId"]
