"""
Tests for Wallet models

Test strategy:
1. Unit tests for models and the record codec
2. Service tests drive the ledger through its public operations
3. Storage tests write real files under tmp_path
"""

import pytest

from pydantic import ValidationError

from wallet.models.ledger import (
    Account,
    Favorite,
    LedgerSnapshot,
    Payment,
    PaymentStatus,
)
from wallet.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestLedgerModels:
    """Tests for ledger Pydantic models."""

    def test_account_creation(self):
        """Test Account model creation with default balance."""
        account = Account(id=1, phone="+992000000001")
        assert account.balance == 0

    def test_account_rejects_negative_balance(self):
        """Test that a negative balance is rejected."""
        with pytest.raises(ValidationError):
            Account(id=1, phone="+992000000001", balance=-1)

    def test_account_balance_assignment_is_validated(self):
        """Test that assignment can't push the balance below zero."""
        account = Account(id=1, phone="+992000000001", balance=10)
        with pytest.raises(ValidationError):
            account.balance -= 11
        assert account.balance == 10

    def test_account_requires_phone(self):
        with pytest.raises(ValidationError):
            Account(id=1, phone="")

    def test_payment_defaults(self):
        """Test Payment gets a fresh id and in-progress status."""
        first = Payment(account_id=1, amount=100, category="auto")
        second = Payment(account_id=1, amount=100, category="auto")
        assert first.status == PaymentStatus.IN_PROGRESS
        assert first.id != second.id

    def test_payment_rejects_non_positive_amount(self):
        with pytest.raises(ValidationError):
            Payment(account_id=1, amount=0, category="auto")

    def test_money_is_strict_integer(self):
        """Test that fractional money is rejected."""
        with pytest.raises(ValidationError):
            Payment(account_id=1, amount=10.5, category="auto")

    def test_favorite_is_frozen(self):
        favorite = Favorite(account_id=1, amount=100, name="Taxi", category="auto")
        with pytest.raises(ValidationError):
            favorite.amount = 200

    def test_snapshot_is_empty(self):
        assert LedgerSnapshot().is_empty
        assert not LedgerSnapshot(accounts=[Account(id=1, phone="x")]).is_empty

    def test_payment_status_values(self):
        assert PaymentStatus("in_progress") is PaymentStatus.IN_PROGRESS
        assert PaymentStatus.DONE.value == "done"
        assert PaymentStatus.FAIL.value == "fail"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.ACCOUNT_REGISTERED,
            description="Account registered",
        )
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.payment_created(
            payment_id="p1",
            account_id=1,
            amount=500,
            category="food",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "payment_created"
        assert log_dict["entity_id"] == "p1"
        assert log_dict["details"]["amount"] == 500

    def test_payment_rejected_is_warning(self):
        event = AuditEventBuilder.payment_rejected("p1", 1, 500)
        assert event.severity == AuditSeverity.WARNING
        assert event.details["refunded"] == 500

    def test_operation_failed_is_error(self):
        event = AuditEventBuilder.operation_failed(
            operation="pay",
            error_type="InsufficientBalanceError",
            error_message="Not enough balance",
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.error_code == "InsufficientBalanceError"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
