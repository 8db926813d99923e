"""
Tests for the ledger store: add, auto-split, edit and delete.
"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

from finance_ledger.ledger import LedgerStore
from finance_ledger.models.transaction import (
    ExpenseCategory,
    SplitResult,
    Transaction,
    TransactionType,
)
from finance_ledger.validation import (
    InvalidAmountError,
    InvalidCategoryError,
    NotFoundError,
    PaymentExceedsLoanError,
    UnknownTransactionTypeError,
)


NOW = datetime(2026, 10, 19, 12, 0)


class TickingClock:
    """Clock that advances one minute per call."""

    def __init__(self, start: datetime = NOW):
        self.current = start

    def __call__(self) -> datetime:
        moment = self.current
        self.current += timedelta(minutes=1)
        return moment


@pytest.fixture
def store():
    return LedgerStore(clock=TickingClock())


class TestAdd:
    """Tests for plain additions."""

    def test_add_income(self, store):
        """Test that income raises cash in hand."""
        tx = store.add("income", "1000", "Salary")

        assert isinstance(tx, Transaction)
        assert tx.type == TransactionType.INCOME
        assert tx.amount == Decimal("1000")
        assert tx.date == NOW
        assert store.state.cash_in_hand == Decimal("1000")
        assert store.state.net_balance == Decimal("1000")

    def test_newest_first(self, store):
        """Test that new transactions go to the front."""
        first = store.add("income", "10")
        second = store.add("income", "20")

        assert store.transactions == (second, first)
        assert store.recent(1) == (second,)

    def test_expense_within_cash_is_not_split(self, store):
        store.add("income", "100")
        tx = store.add("expense", "40", "Groceries", "food")

        assert isinstance(tx, Transaction)
        assert tx.category == ExpenseCategory.FOOD
        assert store.state.cash_in_hand == Decimal("60")

    def test_expense_equal_to_cash_is_not_split(self, store):
        """Test the boundary: amount == cash is a plain expense."""
        store.add("income", "100")
        tx = store.add("expense", "100")

        assert isinstance(tx, Transaction)
        assert store.state.cash_in_hand == Decimal("0")

    def test_category_ignored_for_non_expense(self, store):
        """Test that a category on income is dropped, not rejected."""
        tx = store.add("income", "100", "Bonus", "Food")
        assert tx.category is None

    def test_default_description(self, store):
        tx = store.add("debt", "50")
        assert tx.description == "New Debt"

    def test_rejects_bad_amounts(self, store):
        """Test that invalid amounts leave the store untouched."""
        for raw in ("", "   ", "abc", "12abc", "0", "-5", "NaN", "Infinity", None):
            with pytest.raises(InvalidAmountError):
                store.add("income", raw)

        assert len(store) == 0

    def test_rejects_unknown_type(self, store):
        with pytest.raises(UnknownTransactionTypeError):
            store.add("refund", "10")
        assert len(store) == 0

    def test_rejects_unknown_expense_category(self, store):
        with pytest.raises(InvalidCategoryError):
            store.add("expense", "10", "", "Travel")
        assert len(store) == 0


class TestAutoSplit:
    """Tests for expenses that exceed the cash in hand."""

    def test_split_with_partial_cash(self, store):
        """Test income 1000 then expense 1500: expense 1000 + debt 500."""
        income = store.add("income", "1000")
        result = store.add("expense", "1500", "Laptop", "Shopping")

        assert isinstance(result, SplitResult)
        assert result.expense.amount == Decimal("1000")
        assert result.expense.description == "Laptop"
        assert result.expense.category == ExpenseCategory.SHOPPING
        assert result.debt.amount == Decimal("500")
        assert result.debt.description == "Debt from: Laptop"
        assert result.debt.category is None
        assert result.requested_amount == Decimal("1500")

        assert store.transactions == (result.debt, result.expense, income)

        state = store.state
        assert state.cash_in_hand == Decimal("0")
        assert state.loan_amount == Decimal("500")
        assert state.net_balance == Decimal("-500")

    def test_split_legs_share_a_timestamp(self, store):
        store.add("income", "10")
        result = store.add("expense", "30")
        assert result.expense.date == result.debt.date

    def test_split_without_description(self, store):
        store.add("income", "10")
        result = store.add("expense", "30")
        assert result.expense.description == "Expense"
        assert result.debt.description == "Debt from: Expense"

    def test_zero_cash_gives_debt_only(self, store):
        """Test that no zero-amount expense is ever created."""
        result = store.add("expense", "300", "Rent")

        assert isinstance(result, SplitResult)
        assert result.expense is None
        assert result.debt.amount == Decimal("300")
        assert store.transactions == (result.debt,)
        assert store.state.cash_in_hand == Decimal("0")
        assert store.state.loan_amount == Decimal("300")

    def test_negative_cash_is_treated_as_zero(self, store):
        """Test that negative cash does not inflate the debt leg."""
        store.add("income", "100")
        store.add("debt", "500")
        store.add("loan-payment", "300")
        assert store.state.cash_in_hand == Decimal("-200")

        result = store.add("expense", "50")

        assert result.expense is None
        assert result.debt.amount == Decimal("50")
        assert store.state.cash_in_hand == Decimal("-200")
        assert store.state.loan_amount == Decimal("250")

    def test_split_preserves_requested_total(self, store):
        store.add("income", "12.34")
        result = store.add("expense", "100.01")
        assert sum(t.amount for t in result.transactions) == Decimal("100.01")


class TestLoanPayment:
    """Tests for the loan-payment limit."""

    def test_payment_within_loan(self, store):
        store.add("income", "500")
        store.add("debt", "200")
        store.add("loan-payment", "200")

        assert store.state.loan_amount == Decimal("0")
        assert store.state.cash_in_hand == Decimal("300")
        assert store.state.net_balance == Decimal("300")

    def test_payment_exceeding_loan_is_rejected(self, store):
        """Test that a rejected payment leaves transactions unchanged."""
        store.add("income", "1000")
        store.add("debt", "100")
        before = store.transactions

        with pytest.raises(PaymentExceedsLoanError) as exc_info:
            store.add("loan-payment", "150")

        assert exc_info.value.requested == Decimal("150")
        assert exc_info.value.outstanding == Decimal("100")
        assert store.transactions == before

    def test_payment_without_loan_is_rejected(self, store):
        store.add("income", "1000")
        with pytest.raises(PaymentExceedsLoanError):
            store.add("loan-payment", "1")


class TestEdit:
    """Tests for in-place edits."""

    def test_edit_amount_recomputes(self, store):
        """Test that editing keeps id, type, date and position."""
        income = store.add("income", "100", "Salary")
        store.add("income", "5")

        updated = store.edit(income.id, "250", "Salary")

        assert updated.id == income.id
        assert updated.type == income.type
        assert updated.date == income.date
        assert store.transactions[1] == updated
        assert store.state.cash_in_hand == Decimal("255")

    def test_edit_accepts_string_id(self, store):
        income = store.add("income", "100")
        store.edit(str(income.id), "1")
        assert store.state.cash_in_hand == Decimal("1")

    def test_edit_expense_keeps_category_when_omitted(self, store):
        store.add("income", "100")
        expense = store.add("expense", "10", "Bus", "Transport")

        updated = store.edit(expense.id, "12", "Bus")
        assert updated.category == ExpenseCategory.TRANSPORT

    def test_edit_expense_changes_category(self, store):
        store.add("income", "100")
        expense = store.add("expense", "10", "Bus", "Transport")

        updated = store.edit(expense.id, "10", "Movie", "entertainment")
        assert updated.category == ExpenseCategory.ENTERTAINMENT

    def test_edit_non_expense_ignores_category(self, store):
        income = store.add("income", "100")
        updated = store.edit(income.id, "100", "", "Food")
        assert updated.category is None

    def test_edit_empty_description_gets_default(self, store):
        debt = store.add("debt", "100", "Car loan")
        updated = store.edit(debt.id, "100", "")
        assert updated.description == "New Debt"

    def test_edit_unknown_id(self, store):
        store.add("income", "100")
        with pytest.raises(NotFoundError):
            store.edit(uuid4(), "10")

    def test_edit_invalid_amount_changes_nothing(self, store):
        income = store.add("income", "100")
        before = store.transactions

        with pytest.raises(InvalidAmountError):
            store.edit(income.id, "-1")

        assert store.transactions == before
        assert store.state.cash_in_hand == Decimal("100")

    def test_edit_does_not_recheck_loan_payments(self, store):
        """Test that edits may push a payment past the original loan."""
        store.add("income", "1000")
        store.add("debt", "100")
        payment = store.add("loan-payment", "50")

        store.edit(payment.id, "400")

        assert store.state.loan_amount == Decimal("-300")
        assert store.state.net_balance == Decimal("600")


class TestDelete:
    """Tests for deletion."""

    def test_delete_recomputes(self, store):
        income = store.add("income", "100")
        store.add("income", "50")

        store.delete(income.id)

        assert income.id not in store
        assert len(store) == 1
        assert store.state.cash_in_hand == Decimal("50")

    def test_delete_unknown_id_is_noop(self, store):
        """Test that deleting a missing id changes nothing."""
        store.add("income", "100")
        before = store.transactions
        state = store.state

        store.delete(uuid4())
        store.delete("not-a-uuid")

        assert store.transactions == before
        assert store.state == state

    def test_delete_is_idempotent(self, store):
        income = store.add("income", "100")
        store.delete(income.id)
        store.delete(income.id)
        assert len(store) == 0
        assert store.state.net_balance == Decimal("0")


class TestSnapshots:
    """Tests that callers never see the live list."""

    def test_transactions_is_a_tuple(self, store):
        store.add("income", "1")
        assert isinstance(store.transactions, tuple)

    def test_seeded_store_computes_state(self):
        seeded = LedgerStore(
            [
                Transaction(type="debt", amount=Decimal("40"), date=NOW),
                Transaction(type="income", amount=Decimal("100"), date=NOW),
            ]
        )
        assert seeded.state.cash_in_hand == Decimal("100")
        assert seeded.state.loan_amount == Decimal("40")
        assert seeded.state.net_balance == Decimal("-40")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
