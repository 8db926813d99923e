"""
Input Validation for the Ledger

DESIGN DECISION: Validation happens before any state is touched.

STAGE 1 - INPUT PARSING:
- Amount text to Decimal (finite, strictly positive)
- Transaction type, category and time range from raw strings

STAGE 2 - BALANCE CHECKS:
- A loan payment may not exceed the outstanding loan
- This needs the current LedgerState, so the store runs it

IMPORTANT: Validation NEVER silently fixes input.
Anything that does not parse is rejected with a LedgerError.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from uuid import UUID

from finance_ledger.models.reports import ALL_CATEGORIES, TimeRange
from finance_ledger.models.transaction import (
    ExpenseCategory,
    LedgerState,
    TransactionType,
)


AmountInput = Union[str, int, float, Decimal]


class LedgerError(Exception):
    """
    Base exception for rejected ledger requests.

    Carries the same information a validation issue would, so the
    presentation layer can show a message next to the right field.
    """

    def __init__(
        self,
        message: str,
        field: str = "",
        suggested_fix: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.suggested_fix = suggested_fix


class InvalidAmountError(LedgerError):
    """Amount is non-numeric, not finite, zero or negative."""

    def __init__(self, raw_amount: object, reason: str):
        super().__init__(
            f"Invalid amount {raw_amount!r}: {reason}",
            field="amount",
            suggested_fix="Please enter a valid amount",
        )
        self.raw_amount = raw_amount
        self.reason = reason


class PaymentExceedsLoanError(LedgerError):
    """Loan payment is larger than the outstanding loan."""

    def __init__(self, requested: Decimal, outstanding: Decimal):
        super().__init__(
            f"Loan payment of {requested} exceeds the outstanding loan of {outstanding}",
            field="amount",
            suggested_fix=f"You can't pay more than your current loan amount of {outstanding:.2f}",
        )
        self.requested = requested
        self.outstanding = outstanding


class NotFoundError(LedgerError):
    """No transaction with the given id."""

    def __init__(self, transaction_id: UUID):
        super().__init__(
            f"Transaction {transaction_id} not found",
            field="id",
        )
        self.transaction_id = transaction_id


class UnknownTransactionTypeError(LedgerError):
    """Type is not one of the supported transaction types."""

    def __init__(self, raw_type: object):
        allowed = ", ".join(t.value for t in TransactionType)
        super().__init__(
            f"Unknown transaction type {raw_type!r}",
            field="type",
            suggested_fix=f"Use one of: {allowed}",
        )
        self.raw_type = raw_type


class InvalidCategoryError(LedgerError):
    """Category is not one of the fixed expense categories."""

    def __init__(self, raw_category: object):
        allowed = ", ".join(c.value for c in ExpenseCategory)
        super().__init__(
            f"Unknown category {raw_category!r}",
            field="category",
            suggested_fix=f"Use one of: {allowed}",
        )
        self.raw_category = raw_category


class InvalidTimeRangeError(LedgerError):
    """Time range is not week, month, year or all."""

    def __init__(self, raw_range: object):
        allowed = ", ".join(r.value for r in TimeRange)
        super().__init__(
            f"Unknown time range {raw_range!r}",
            field="time_range",
            suggested_fix=f"Use one of: {allowed}",
        )
        self.raw_range = raw_range


def parse_amount(value: AmountInput) -> Decimal:
    """
    Parse user input into a positive, finite Decimal.

    Text is stripped and parsed as a whole; trailing garbage such as
    "12abc" is rejected rather than truncated. Floats are accepted only
    through their shortest repr so binary noise never enters the ledger.

    Raises:
        InvalidAmountError: For anything that is not a number > 0
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(value, "not a number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidAmountError(value, "amount is required")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise InvalidAmountError(value, "not a number") from None
    else:
        raise InvalidAmountError(value, "not a number")

    if not amount.is_finite():
        raise InvalidAmountError(value, "amount must be finite")
    if amount <= 0:
        raise InvalidAmountError(value, "amount must be greater than zero")

    return amount


def parse_transaction_type(value: Union[str, TransactionType]) -> TransactionType:
    """Parse a raw type string ("income", "loan-payment", ...)."""
    try:
        return TransactionType(value)
    except ValueError:
        raise UnknownTransactionTypeError(value) from None


def parse_category(
    value: Union[str, ExpenseCategory, None],
) -> Optional[ExpenseCategory]:
    """
    Parse a raw category.

    Matching is case-insensitive ("food" and "Food" are the same).
    None and the empty string mean "no category".
    """
    if value is None or isinstance(value, ExpenseCategory):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        for category in ExpenseCategory:
            if category.value.lower() == text.lower():
                return category
    raise InvalidCategoryError(value)


def parse_category_filter(
    value: Union[str, ExpenseCategory, None],
) -> Optional[ExpenseCategory]:
    """Parse a category filter; "all" (or None) maps to None."""
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() == ALL_CATEGORIES:
        return None
    return parse_category(value)


def parse_time_range(value: Union[str, TimeRange]) -> TimeRange:
    """Parse a raw time range ("week", "month", "year", "all")."""
    if isinstance(value, TimeRange):
        return value
    if isinstance(value, str):
        try:
            return TimeRange(value.strip().lower())
        except ValueError:
            pass
    raise InvalidTimeRangeError(value)


class TransactionValidator:
    """
    Validates a request against the current balances.

    Stage 1 (parsing) is stateless; stage 2 needs the LedgerState the
    store has just recomputed.
    """

    def validate_amount(self, value: AmountInput) -> Decimal:
        return parse_amount(value)

    def check_loan_payment(self, amount: Decimal, state: LedgerState) -> None:
        """
        A loan payment may not exceed the outstanding loan.

        Raises:
            PaymentExceedsLoanError: If amount > state.loan_amount
        """
        if amount > state.loan_amount:
            raise PaymentExceedsLoanError(amount, state.loan_amount)

    def needs_split(
        self,
        transaction_type: TransactionType,
        amount: Decimal,
        state: LedgerState,
    ) -> bool:
        """True when an expense exceeds the cash in hand."""
        return (
            transaction_type == TransactionType.EXPENSE
            and amount > state.cash_in_hand
        )
