"""
Core Data Models for the Finance Ledger

These models define the strict schemas for every money movement the
ledger records. They are designed to:
1. Enforce type safety at runtime
2. Never use floats for money (Decimal only)
3. Be immutable once created (edits replace, they never mutate)

DESIGN DECISION: Transactions are frozen Pydantic v2 models.
The ledger store is the only place that can swap one for another.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Kinds of money movement.

    The set is closed: the balance fold has exactly one rule per member.
    """
    INCOME = "income"
    EXPENSE = "expense"
    DEBT = "debt"
    LOAN_PAYMENT = "loan-payment"


class ExpenseCategory(str, Enum):
    """
    Fixed expense categories.

    Only expenses carry a category. Member order is the reporting order.
    """
    FOOD = "Food"
    TRANSPORT = "Transport"
    UTILITIES = "Utilities"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    OTHER = "Other"


DEFAULT_DESCRIPTIONS: dict[TransactionType, str] = {
    TransactionType.INCOME: "Income",
    TransactionType.EXPENSE: "Expense",
    TransactionType.DEBT: "New Debt",
    TransactionType.LOAN_PAYMENT: "Loan Payment",
}

DEBT_FROM_PREFIX = "Debt from: "


def default_description(transaction_type: TransactionType) -> str:
    """Label used when a transaction is recorded without a description."""
    return DEFAULT_DESCRIPTIONS[TransactionType(transaction_type)]


# =============================================================================
# TRANSACTION
# =============================================================================

class Transaction(BaseModel):
    """
    A single recorded money movement.

    CRITICAL: `date` is set once at creation and survives every edit.
    Edits only change amount, description and (for expenses) category.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    type: TransactionType = Field(
        ...,
        description="Kind of money movement"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive amount, sign comes from the type"
    )
    description: str = Field(
        default="",
        description="Free text, defaults to a type label when empty"
    )
    category: Optional[ExpenseCategory] = Field(
        default=None,
        description="Expense category (expenses only)"
    )
    date: datetime = Field(
        default_factory=datetime.now,
        description="When the transaction was recorded"
    )

    @model_validator(mode='before')
    @classmethod
    def apply_defaults(cls, data: Any) -> Any:
        """Fill the type-derived description and the expense category."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        try:
            tx_type = TransactionType(data.get("type"))
        except ValueError:
            # Let field validation report the bad type
            return data

        description = data.get("description")
        if description is None or not str(description).strip():
            data["description"] = default_description(tx_type)

        if tx_type == TransactionType.EXPENSE and data.get("category") is None:
            data["category"] = ExpenseCategory.OTHER

        return data

    @model_validator(mode='after')
    def validate_category(self) -> 'Transaction':
        """Only expenses may carry a category."""
        if self.type != TransactionType.EXPENSE and self.category is not None:
            raise ValueError(
                f"Category is only allowed on expenses, not on {self.type.value}"
            )
        return self

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "id": str(self.id),
            "type": self.type.value,
            "amount": str(self.amount),
            "description": self.description,
            "category": self.category.value if self.category else None,
            "date": self.date.isoformat(),
        }


class SplitResult(BaseModel):
    """
    Outcome of an expense that exceeded the cash in hand.

    The affordable part is recorded as an expense (absent when there was
    no positive cash), the remainder as a debt.
    """
    model_config = ConfigDict(frozen=True)

    expense: Optional[Transaction] = Field(
        default=None,
        description="Expense leg for the available cash"
    )
    debt: Transaction = Field(
        ...,
        description="Debt leg for the unaffordable remainder"
    )

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Legs in collection order (newest first)."""
        if self.expense is None:
            return (self.debt,)
        return (self.debt, self.expense)

    @property
    def requested_amount(self) -> Decimal:
        """The amount the caller originally asked to spend."""
        return sum((t.amount for t in self.transactions), Decimal("0"))


# =============================================================================
# DERIVED STATE
# =============================================================================

class LedgerState(BaseModel):
    """
    Balances derived from the full transaction list.

    Never stored on its own: always the output of a full recompute.
    """
    model_config = ConfigDict(frozen=True)

    cash_in_hand: Decimal = Field(
        default=Decimal("0"),
        description="Income minus expenses minus loan payments"
    )
    loan_amount: Decimal = Field(
        default=Decimal("0"),
        description="Debt minus loan payments"
    )
    net_balance: Decimal = Field(
        default=Decimal("0"),
        description="-loan_amount while a loan is outstanding, else cash_in_hand"
    )

    @property
    def has_outstanding_loan(self) -> bool:
        return self.loan_amount > 0

    @property
    def can_pay_loan(self) -> bool:
        """A loan payment only makes sense with a loan and some cash."""
        return self.loan_amount > 0 and self.cash_in_hand > 0
