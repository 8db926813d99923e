"""Validation package."""

from finance_ledger.validation.validator import (
    InvalidAmountError,
    InvalidCategoryError,
    InvalidTimeRangeError,
    LedgerError,
    NotFoundError,
    PaymentExceedsLoanError,
    TransactionValidator,
    UnknownTransactionTypeError,
    parse_amount,
    parse_category,
    parse_category_filter,
    parse_time_range,
    parse_transaction_type,
)

__all__ = [
    "InvalidAmountError",
    "InvalidCategoryError",
    "InvalidTimeRangeError",
    "LedgerError",
    "NotFoundError",
    "PaymentExceedsLoanError",
    "TransactionValidator",
    "UnknownTransactionTypeError",
    "parse_amount",
    "parse_category",
    "parse_category_filter",
    "parse_time_range",
    "parse_transaction_type",
]
