"""Unit tests for LedgerEntry domain entity"""

import pytest
from pydantic import ValidationError
from src.domain.ledger_entry import LedgerEntry


class TestLedgerEntryCreation:
    def test_new_entry_starts_at_zero(self):
        # Arrange & Act
        entry = LedgerEntry(payer_id="payer_abc")

        # Assert
        assert entry.balance == 0
        assert entry.max_balance is None
        assert entry.created_at is not None

    def test_negative_balance_is_rejected(self):
        with pytest.raises(ValidationError):
            LedgerEntry(payer_id="payer_abc", balance=-1)

    def test_balance_above_ceiling_is_rejected(self):
        with pytest.raises(ValidationError):
            LedgerEntry(payer_id="payer_abc", balance=11, max_balance=10)

    def test_assignment_is_validated(self):
        """
        Given: An existing entry
        When: The balance is set below zero
        Then: Validation fails and the balance keeps its previous value
        """
        entry = LedgerEntry(payer_id="payer_abc", balance=5)

        with pytest.raises(ValidationError):
            entry.balance = -5

        assert entry.balance == 5


class TestLedgerEntryRules:
    def test_capped_without_ceiling_returns_candidate(self):
        entry = LedgerEntry(payer_id="payer_abc")
        assert entry.capped(10 ** 12) == 10 ** 12

    def test_capped_truncates_at_ceiling(self):
        entry = LedgerEntry(payer_id="payer_abc", max_balance=500)
        assert entry.capped(499) == 499
        assert entry.capped(501) == 500

    def test_covers(self):
        entry = LedgerEntry(payer_id="payer_abc", balance=100)
        assert entry.covers(100)
        assert not entry.covers(101)
