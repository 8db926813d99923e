"""
Ledger Store

The single owner of the ordered transaction collection.

GUARANTEES:
- Every request is validated before anything changes (accept or reject,
  never a partial mutation)
- Balances are recomputed from the full list after every mutation
- Callers only ever see tuples and frozen models, never the live list

Ordering is most-recent-first. That is a display convention; the
balance fold does not depend on it.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Iterator, Optional, Union
from uuid import UUID

from finance_ledger.engine.balance import compute_balances
from finance_ledger.models.transaction import (
    DEBT_FROM_PREFIX,
    ExpenseCategory,
    LedgerState,
    SplitResult,
    Transaction,
    TransactionType,
    default_description,
)
from finance_ledger.validation.validator import (
    AmountInput,
    NotFoundError,
    TransactionValidator,
    parse_category,
    parse_transaction_type,
)


TransactionId = Union[UUID, str]


class LedgerStore:
    """
    In-memory ledger with add/edit/delete.

    Single-writer: the integrating application serialises calls.
    """

    def __init__(
        self,
        transactions: Iterable[Transaction] = (),
        validator: Optional[TransactionValidator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the store.

        Args:
            transactions: Existing transactions, newest first
            validator: Request validator (a default one if None)
            clock: Source of insertion timestamps
        """
        self._transactions: list[Transaction] = list(transactions)
        self._validator = validator or TransactionValidator()
        self._clock = clock
        self._state = compute_balances(self._transactions)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> LedgerState:
        """Balances as of the last mutation."""
        return self._state

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def __contains__(self, transaction_id: object) -> bool:
        return self._index_of(transaction_id) is not None

    def get(self, transaction_id: TransactionId) -> Optional[Transaction]:
        index = self._index_of(transaction_id)
        if index is None:
            return None
        return self._transactions[index]

    def recent(self, limit: int) -> tuple[Transaction, ...]:
        """The `limit` most recent transactions."""
        return tuple(self._transactions[:max(limit, 0)])

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(
        self,
        transaction_type: Union[TransactionType, str],
        amount: AmountInput,
        description: str = "",
        category: Union[ExpenseCategory, str, None] = None,
    ) -> Union[Transaction, SplitResult]:
        """
        Record a new transaction.

        An expense larger than the cash in hand is split into an expense
        for the available cash and a debt for the rest.

        Raises:
            UnknownTransactionTypeError: Type is not supported
            InvalidAmountError: Amount is not a number > 0
            InvalidCategoryError: Expense category is unknown
            PaymentExceedsLoanError: Loan payment > outstanding loan
        """
        tx_type = parse_transaction_type(transaction_type)
        value = self._validator.validate_amount(amount)
        # Categories are only meaningful on expenses; anything else drops it
        tx_category = parse_category(category) if tx_type == TransactionType.EXPENSE else None
        description = description or ""
        state = self._state

        if tx_type == TransactionType.LOAN_PAYMENT:
            self._validator.check_loan_payment(value, state)

        now = self._clock()

        if self._validator.needs_split(tx_type, value, state):
            split = self._build_split(value, description, tx_category, state, now)
            self._prepend(split.transactions)
            return split

        transaction = Transaction(
            type=tx_type,
            amount=value,
            description=description,
            category=tx_category,
            date=now,
        )
        self._prepend((transaction,))
        return transaction

    def edit(
        self,
        transaction_id: TransactionId,
        amount: AmountInput,
        description: str = "",
        category: Union[ExpenseCategory, str, None] = None,
    ) -> Transaction:
        """
        Replace a transaction in place.

        Id, type and date are kept. An expense edited without a category
        keeps its current one; other types never get a category.

        Raises:
            InvalidAmountError: Amount is not a number > 0
            InvalidCategoryError: Expense category is unknown
            NotFoundError: No transaction with that id
        """
        value = self._validator.validate_amount(amount)

        index = self._index_of(transaction_id)
        if index is None:
            raise NotFoundError(transaction_id)
        original = self._transactions[index]

        new_category = None
        if original.is_expense:
            new_category = parse_category(category) or original.category

        updated = Transaction(
            id=original.id,
            type=original.type,
            amount=value,
            description=description or "",
            category=new_category,
            date=original.date,
        )

        self._transactions[index] = updated
        self._recompute()
        return updated

    def delete(self, transaction_id: TransactionId) -> None:
        """Remove a transaction. Unknown ids are ignored."""
        index = self._index_of(transaction_id)
        if index is None:
            return
        del self._transactions[index]
        self._recompute()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _build_split(
        self,
        amount: Decimal,
        description: str,
        category: Optional[ExpenseCategory],
        state: LedgerState,
        now: datetime,
    ) -> SplitResult:
        """Both legs are built before either is stored."""
        available = max(state.cash_in_hand, Decimal("0"))
        label = description.strip() or default_description(TransactionType.EXPENSE)

        expense = None
        if available > 0:
            expense = Transaction(
                type=TransactionType.EXPENSE,
                amount=available,
                description=description,
                category=category,
                date=now,
            )

        debt = Transaction(
            type=TransactionType.DEBT,
            amount=amount - available,
            description=f"{DEBT_FROM_PREFIX}{label}",
            date=now,
        )

        return SplitResult(expense=expense, debt=debt)

    def _prepend(self, transactions: tuple[Transaction, ...]) -> None:
        self._transactions[:0] = transactions
        self._recompute()

    def _recompute(self) -> None:
        self._state = compute_balances(self._transactions)

    def _index_of(self, transaction_id: object) -> Optional[int]:
        key = str(transaction_id)
        for index, transaction in enumerate(self._transactions):
            if str(transaction.id) == key:
                return index
        return None
