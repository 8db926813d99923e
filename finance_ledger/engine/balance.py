"""
Balance Engine

DESIGN DECISION: Balances are a pure fold over the whole transaction list.
There is no incremental update path; an edit can change any amount that
feeds the fold, so the store recomputes from scratch after every mutation.

The fold knows nothing about auto-splitting. An expense larger than the
cash in hand simply drives cash negative here; splitting is the store's job.
"""

from decimal import Decimal
from typing import Iterable

from finance_ledger.models.transaction import (
    LedgerState,
    Transaction,
    TransactionType,
)


def net_balance(cash_in_hand: Decimal, loan_amount: Decimal) -> Decimal:
    """
    Headline balance.

    Loan-dominant: while any loan is outstanding the net balance is the
    negated loan, and positive cash is ignored. Otherwise it is the cash
    in hand, which may itself be negative.
    """
    if loan_amount > 0:
        return -loan_amount
    return cash_in_hand


def compute_balances(transactions: Iterable[Transaction]) -> LedgerState:
    """Fold the transactions into cash in hand, loan amount and net balance."""
    cash = Decimal("0")
    loan = Decimal("0")

    for transaction in transactions:
        amount = transaction.amount
        if transaction.type == TransactionType.INCOME:
            cash += amount
        elif transaction.type == TransactionType.EXPENSE:
            cash -= amount
        elif transaction.type == TransactionType.DEBT:
            loan += amount
        elif transaction.type == TransactionType.LOAN_PAYMENT:
            loan -= amount
            cash -= amount

    return LedgerState(
        cash_in_hand=cash,
        loan_amount=loan,
        net_balance=net_balance(cash, loan),
    )
