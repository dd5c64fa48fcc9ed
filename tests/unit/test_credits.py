"""Unit tests for the in-memory credit ledger."""

import pytest
import pytest_check as check

from hiremate.api.credits import CreditLedger, InsufficientCreditsError


class TestCreditLedger:
    """Tests for CreditLedger balances."""

    def test_new_token_gets_starting_credits(self) -> None:
        """Unknown tokens start with the configured balance."""
        ledger = CreditLedger(starting_credits=5)

        check.equal(ledger.balance("tok"), 5)
        check.is_true(ledger.has_credits("tok"))

    def test_deduct_returns_remaining(self) -> None:
        """Deductions reduce the balance of that token only."""
        ledger = CreditLedger(starting_credits=2)

        check.equal(ledger.deduct("a"), 1)
        check.equal(ledger.balance("a"), 1)
        check.equal(ledger.balance("b"), 2)

    def test_deduct_beyond_balance_raises(self) -> None:
        """An exhausted token cannot be charged."""
        ledger = CreditLedger(starting_credits=1)
        ledger.deduct("tok")

        with pytest.raises(InsufficientCreditsError) as exc_info:
            ledger.deduct("tok")

        check.equal(exc_info.value.balance, 0)
        check.is_false(ledger.has_credits("tok"))

    def test_add(self) -> None:
        """Credits can be topped up."""
        ledger = CreditLedger(starting_credits=0)

        assert ledger.add("tok", 10) == 10

    def test_refund_restores_charge(self) -> None:
        """A refunded charge returns the token to its previous balance."""
        ledger = CreditLedger(starting_credits=1)
        ledger.deduct("tok")

        check.equal(ledger.refund("tok"), 1)
        check.is_true(ledger.has_credits("tok"))
