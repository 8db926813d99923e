"""Formatting utilities for currency and date display.

These sit on the presentation side of the core boundary: they take the
raw Decimal and datetime values the ledger returns and never feed
anything back into it.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from finance_ledger.config import get_settings
from finance_ledger.engine.bucketing import MONTH_LABELS
from finance_ledger.models.transaction import TransactionType, default_description


def format_currency(
    amount: Union[Decimal, int],
    symbol: Optional[str] = None,
) -> str:
    """Format an amount as "<symbol> <amount with 2 decimals>".

    Args:
        amount: The amount to format
        symbol: Currency symbol; the configured one when omitted

    Example:
        >>> format_currency(Decimal("1234.5"), "Rs.")
        'Rs. 1234.50'
        >>> format_currency(Decimal("-500"), "Rs.")
        'Rs. -500.00'
    """
    if symbol is None:
        symbol = get_settings().ledger.currency_symbol
    return f"{symbol} {Decimal(amount):.2f}"


def format_date(moment: datetime) -> str:
    """Short US-style date, e.g. "Oct 19, 2026"."""
    return f"{MONTH_LABELS[moment.month - 1]} {moment.day}, {moment.year}"


def amount_sign(transaction_type: Union[TransactionType, str]) -> str:
    """Sign shown in front of a transaction amount in lists.

    Income is "+", a new debt has no sign, everything that takes cash
    out ("expense", "loan-payment") is "-".
    """
    tx_type = TransactionType(transaction_type)
    if tx_type == TransactionType.INCOME:
        return "+"
    if tx_type == TransactionType.DEBT:
        return ""
    return "-"


def display_description(description: str, transaction_type: Union[TransactionType, str]) -> str:
    """The description, or the type label when it is empty."""
    return description or default_description(TransactionType(transaction_type))
