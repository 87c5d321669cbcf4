"""
Tests for Finance Tracker models

Test strategy:
1. Unit tests for individual components (models, validators)
2. Integration tests for flows (with in-memory storage)
3. No Streamlit and no disk access unless a test asks for tmp_path
"""

import time
from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.models.alert import AlertChannel
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from finance_tracker.models.identity import Identity, Role, identity_id_for_email
from finance_tracker.models.transaction import (
    Transaction,
    TransactionDraft,
    TransactionStatus,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    generate_transaction_id,
)
from finance_tracker.alerts import get_admin_stats, get_alerts


class TestTransactionModels:
    """Tests for transaction-related Pydantic models."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        tx = Transaction(
            id=1,
            name="Salary",
            type=TransactionType.CREDIT,
            amount=Decimal("50000"),
            date=date(2025, 5, 1),
            owner_id="user_1",
        )
        assert tx.name == "Salary"
        assert tx.status == TransactionStatus.PAID
        assert tx.notes is None

    def test_transaction_strips_whitespace(self):
        """Test that whitespace is stripped from the name."""
        tx = Transaction(
            id=1,
            name="  Rent  ",
            type=TransactionType.DEBIT,
            amount=Decimal("15000"),
            date=date(2025, 5, 1),
            owner_id="user_1",
        )
        assert tx.name == "Rent"

    def test_transaction_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            Transaction(
                id=1,
                name="Test",
                type=TransactionType.DEBIT,
                amount=Decimal("-100"),
                date=date(2025, 5, 1),
                owner_id="user_1",
            )

    def test_loan_fields_cleared_for_non_loan_types(self):
        """Interest rate and term only survive on Loan and EMI records."""
        tx = Transaction(
            id=1,
            name="Phone",
            type=TransactionType.INSTALLMENT,
            amount=Decimal("2000"),
            date=date(2025, 5, 1),
            interest_rate=Decimal("12"),
            loan_term=Decimal("1"),
            owner_id="user_1",
        )
        assert tx.interest_rate is None
        assert tx.loan_term is None

    def test_loan_fields_kept_for_loan_types(self):
        """Test that a Loan keeps its rate and term."""
        tx = Transaction(
            id=1,
            name="Home loan",
            type=TransactionType.LOAN,
            amount=Decimal("2500000"),
            date=date(2025, 5, 1),
            interest_rate=Decimal("8.5"),
            loan_term=Decimal("20"),
            owner_id="user_1",
        )
        assert tx.interest_rate == Decimal("8.5")
        assert tx.loan_term == Decimal("20")
        assert tx.is_loan is True

    def test_zero_loan_fields_become_none(self):
        """A zero rate or term counts as not given."""
        draft = TransactionDraft(
            name="EMI",
            type=TransactionType.EMI,
            amount=Decimal("5000"),
            date=date(2025, 5, 1),
            interest_rate=Decimal("0"),
            loan_term=Decimal("0"),
        )
        assert draft.interest_rate is None
        assert draft.loan_term is None

    def test_serializes_with_camel_case_keys(self):
        """Stored JSON uses the browser app's key names."""
        tx = Transaction(
            id=7,
            name="Car EMI",
            type=TransactionType.EMI,
            amount=Decimal("12000"),
            date=date(2025, 5, 1),
            status=TransactionStatus.PENDING,
            interest_rate=Decimal("9"),
            loan_term=Decimal("5"),
            owner_id="user_1",
        )
        data = tx.model_dump(mode="json", by_alias=True)
        assert data["interestRate"] == "9"
        assert data["loanTerm"] == "5"
        assert data["ownerId"] == "user_1"
        assert data["type"] == "EMI"
        assert data["status"] == "Pending"
        assert data["date"] == "2025-05-01"

    def test_accepts_camel_case_input(self):
        """Test that records written with camelCase keys load back."""
        tx = Transaction.model_validate({
            "id": 1,
            "name": "Loan",
            "type": "Loan",
            "amount": "1000",
            "date": "2025-01-31",
            "interestRate": "7.5",
            "loanTerm": "3",
            "ownerId": "user_1",
        })
        assert tx.interest_rate == Decimal("7.5")
        assert tx.date == date(2025, 1, 31)

    def test_draft_allows_missing_required_fields(self):
        """A draft may be incomplete; the validator decides."""
        draft = TransactionDraft()
        assert draft.name is None
        assert draft.amount is None
        assert draft.type == TransactionType.DEBIT
        assert draft.status == TransactionStatus.PAID

    def test_to_draft_round_trip(self):
        """Test that a stored record turns back into editable form input."""
        tx = Transaction(
            id=42,
            name="Bonus",
            type=TransactionType.CREDIT,
            amount=Decimal("1000"),
            date=date(2025, 5, 1),
            owner_id="user_1",
        )
        draft = tx.to_draft()
        assert draft.id == 42
        assert draft.name == "Bonus"
        assert draft.amount == Decimal("1000")

    def test_transaction_types(self):
        """Test the fixed set of transaction types."""
        assert [t.value for t in TransactionType] == [
            "Credit", "Debit", "EMI", "Loan", "Installment",
        ]
        assert TransactionType.EMI.is_loan is True
        assert TransactionType.INSTALLMENT.is_loan is False


class TestTransactionIds:
    """Tests for transaction id generation."""

    def test_ids_are_strictly_increasing(self):
        """Ids generated back to back never repeat."""
        ids = [generate_transaction_id() for _ in range(1000)]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_ids_track_the_clock(self):
        """Ids are milliseconds since the epoch."""
        now_ms = time.time_ns() // 1_000_000
        assert generate_transaction_id() >= now_ms


class TestIdentityModels:
    """Tests for identity models."""

    def test_identity_defaults_to_user_role(self):
        identity = Identity(id="user_1", email="a@example.com")
        assert identity.role == Role.USER
        assert identity.is_admin is False

    def test_admin_identity(self):
        identity = Identity(id="user_1", email="admin@example.com", role=Role.ADMIN)
        assert identity.is_admin is True

    def test_identity_id_is_stable_per_email(self):
        """The same email, in any case, maps to the same id."""
        assert identity_id_for_email("A@Example.com ") == identity_id_for_email("a@example.com")
        assert identity_id_for_email("a@example.com") != identity_id_for_email("b@example.com")
        assert identity_id_for_email("a@example.com").startswith("user_")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            description="Test transaction added",
        )
        assert event.event_type == AuditEventType.TRANSACTION_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.transaction_added(
            owner_id="user_1",
            transaction_id=5,
            name="Groceries",
            amount="1200",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transaction_added"
        assert log_dict["entity_id"] == "5"
        assert log_dict["details"]["name"] == "Groceries"

    def test_audit_event_builder_user_logged_in(self):
        """Test AuditEventBuilder.user_logged_in."""
        event = AuditEventBuilder.user_logged_in("user_1", "a@example.com", is_admin=False)
        assert event.event_type == AuditEventType.USER_LOGGED_IN
        assert event.owner_id == "user_1"
        assert event.is_user_action is True

    def test_audit_event_builder_rejection_is_warning(self):
        """Test that rejections are logged as warnings."""
        event = AuditEventBuilder.transaction_rejected("user_1", ["Name is required"])
        assert event.severity == AuditSeverity.WARNING
        assert event.error_message == "Name is required"


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Amount is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.error_messages == ["Amount is required"]

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="suspicious_value",
                    message="Amount is zero",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_validation_issue_severity_pattern(self):
        """Test that unknown severities are rejected."""
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestStaticContent:
    """Tests for the example alerts and admin statistics."""

    def test_example_alerts(self):
        alerts = get_alerts()
        assert [alert.title for alert in alerts] == [
            "EMI Due Soon",
            "Investment Matured",
            "Credit Card Payment",
            "Loan Status Update",
        ]

    def test_alerts_by_channel(self):
        whatsapp = get_alerts(AlertChannel.WHATSAPP)
        assert len(whatsapp) == 2
        assert all(alert.channel == AlertChannel.WHATSAPP for alert in whatsapp)

    def test_warning_alerts(self):
        flags = {alert.title: alert.is_warning for alert in get_alerts()}
        assert flags["EMI Due Soon"] is True
        assert flags["Investment Matured"] is False

    def test_admin_stats(self):
        stats = get_admin_stats()
        assert stats.total_registered == 1250
        assert stats.daily_active == 320
        assert stats.new_users_today == 15
        assert stats.monthly_growth_percent == 12


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
