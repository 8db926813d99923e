"""
Tests for settings and display formatting.
"""

import pytest
from datetime import datetime
from decimal import Decimal

from pydantic import ValidationError

from finance_ledger.config import (
    LedgerSettings,
    LoggingSettings,
    get_settings,
    validate_all_settings,
)
from finance_ledger.formatting import (
    amount_sign,
    display_description,
    format_currency,
    format_date,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LEDGER_CURRENCY_SYMBOL", raising=False)
        monkeypatch.delenv("LEDGER_RECENT_TRANSACTIONS_LIMIT", raising=False)
        monkeypatch.delenv("LEDGER_DROP_UNMATCHED_BUCKET_LABELS", raising=False)

        settings = LedgerSettings(_env_file=None)

        assert settings.currency_symbol == "Rs."
        assert settings.recent_transactions_limit == 5
        assert settings.drop_unmatched_bucket_labels is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "$")
        monkeypatch.setenv("LEDGER_DROP_UNMATCHED_BUCKET_LABELS", "false")

        settings = get_settings().ledger

        assert settings.currency_symbol == "$"
        assert settings.drop_unmatched_bucket_labels is False

    def test_recent_limit_bounds(self):
        with pytest.raises(ValidationError):
            LedgerSettings(recent_transactions_limit=0)

    def test_log_level_is_normalised(self):
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_log_level_rejects_unknown(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="chatty")

    def test_validate_all_settings_reports_failures(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        results = validate_all_settings()

        assert results["ledger"] is True
        assert results["logging"] is False
        assert "logging_error" in results


class TestFormatting:
    """Tests for the display helpers."""

    def test_format_currency(self):
        assert format_currency(Decimal("1234.5"), "Rs.") == "Rs. 1234.50"
        assert format_currency(Decimal("-500"), "Rs.") == "Rs. -500.00"
        assert format_currency(0, "$") == "$ 0.00"

    def test_format_currency_uses_configured_symbol(self, monkeypatch):
        monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "EUR")
        assert format_currency(Decimal("1")) == "EUR 1.00"

    def test_format_date(self):
        assert format_date(datetime(2026, 10, 19, 23, 59)) == "Oct 19, 2026"
        assert format_date(datetime(2026, 1, 5)) == "Jan 5, 2026"

    @pytest.mark.parametrize(
        "tx_type,sign",
        [("income", "+"), ("expense", "-"), ("debt", ""), ("loan-payment", "-")],
    )
    def test_amount_sign(self, tx_type, sign):
        assert amount_sign(tx_type) == sign

    def test_display_description(self):
        assert display_description("Rent", "expense") == "Rent"
        assert display_description("", "loan-payment") == "Loan Payment"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
