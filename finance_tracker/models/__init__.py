"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.transaction import (
    LOAN_TYPES,
    Transaction,
    TransactionDraft,
    TransactionStatus,
    TransactionSummary,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    generate_transaction_id,
)
from finance_tracker.models.identity import (
    Identity,
    Role,
    identity_id_for_email,
)
from finance_tracker.models.loan import (
    AmortizationRow,
    LoanResult,
)
from finance_tracker.models.alert import (
    AdminStats,
    Alert,
    AlertChannel,
    AlertType,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "LOAN_TYPES",
    "Transaction",
    "TransactionDraft",
    "TransactionStatus",
    "TransactionSummary",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    "generate_transaction_id",
    # Identity models
    "Identity",
    "Role",
    "identity_id_for_email",
    # Loan models
    "AmortizationRow",
    "LoanResult",
    # Alert models
    "AdminStats",
    "Alert",
    "AlertChannel",
    "AlertType",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
