"""
Core Data Models for Finance Tracker

These models define the schemas for every transaction flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Serialize to the same camelCase JSON the browser app stored

DESIGN DECISION: Form input (TransactionDraft) and stored records
(Transaction) are separate models. A draft may be incomplete; the
validator reports what is missing instead of letting a half-filled
record reach the store.
"""

import datetime as dt
import threading
import time
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Supported transaction types."""
    CREDIT = "Credit"
    DEBIT = "Debit"
    EMI = "EMI"
    LOAN = "Loan"
    INSTALLMENT = "Installment"

    @property
    def is_loan(self) -> bool:
        """Loan-like types carry an interest rate and a term."""
        return self in LOAN_TYPES


LOAN_TYPES = frozenset({TransactionType.LOAN, TransactionType.EMI})


class TransactionStatus(str, Enum):
    """Payment status of a transaction."""
    PAID = "Paid"
    PENDING = "Pending"


# =============================================================================
# ID GENERATION
# =============================================================================

_id_lock = threading.Lock()
_last_id = 0


def generate_transaction_id() -> int:
    """
    Create a transaction id from the current instant in milliseconds.

    Ids are strictly increasing within the process: two records created
    in the same millisecond get consecutive ids.
    """
    global _last_id
    with _id_lock:
        candidate = time.time_ns() // 1_000_000
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return candidate


_CAMEL_CONFIG = ConfigDict(
    str_strip_whitespace=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


def _clear_loan_fields(model):
    """Null out loan-only fields for non-loan types; zero counts as unset."""
    if model.type not in LOAN_TYPES:
        model.interest_rate = None
        model.loan_term = None
        return model
    if not model.interest_rate:
        model.interest_rate = None
    if not model.loan_term:
        model.loan_term = None
    return model


# =============================================================================
# TRANSACTION MODELS
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A transaction as entered in the add/edit form.

    CRITICAL: This is UNVERIFIED input. Name, amount and date may be
    missing; TransactionValidator decides whether it can be stored.
    """
    model_config = _CAMEL_CONFIG

    id: Optional[int] = Field(
        default=None,
        ge=0,
        description="Existing id when editing, None for a new record"
    )
    name: Optional[str] = Field(
        default=None,
        description="Display label, e.g. Groceries or Salary"
    )
    type: TransactionType = Field(
        default=TransactionType.DEBIT,
        description="Transaction type"
    )
    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Amount in the display currency"
    )
    date: Optional[dt.date] = Field(
        default=None,
        description="Transaction date"
    )
    status: TransactionStatus = Field(
        default=TransactionStatus.PAID,
        description="Payment status"
    )
    notes: Optional[str] = Field(
        default=None,
        description="Free-text notes"
    )
    interest_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Annual interest rate in percent (Loan/EMI only)"
    )
    loan_term: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Loan term in years (Loan/EMI only)"
    )

    @model_validator(mode='after')
    def clear_loan_fields(self) -> 'TransactionDraft':
        return _clear_loan_fields(self)


class Transaction(BaseModel):
    """
    A stored transaction.

    Only Transaction objects are persisted. Every required field is
    present and the record belongs to exactly one owner.
    """
    model_config = _CAMEL_CONFIG

    id: int = Field(
        ...,
        ge=0,
        description="Unique id, assigned at creation and never changed"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display label (required)"
    )
    type: TransactionType = Field(
        ...,
        description="Transaction type (required)"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount in the display currency (required)"
    )
    date: dt.date = Field(
        ...,
        description="Transaction date (required)"
    )
    status: TransactionStatus = Field(
        default=TransactionStatus.PAID,
        description="Payment status"
    )
    notes: Optional[str] = None
    interest_rate: Optional[Decimal] = Field(default=None, ge=0)
    loan_term: Optional[Decimal] = Field(default=None, ge=0)
    owner_id: str = Field(
        ...,
        min_length=1,
        description="Identity this record belongs to"
    )

    @model_validator(mode='after')
    def clear_loan_fields(self) -> 'Transaction':
        return _clear_loan_fields(self)

    @property
    def is_loan(self) -> bool:
        return self.type in LOAN_TYPES

    @property
    def is_pending(self) -> bool:
        return self.status == TransactionStatus.PENDING

    def to_draft(self) -> TransactionDraft:
        """Turn a stored record back into form input for editing."""
        return TransactionDraft.model_validate(
            self.model_dump(exclude={"owner_id"})
        )


# =============================================================================
# SUMMARY MODEL
# =============================================================================

class TransactionSummary(BaseModel):
    """Category totals derived from a collection of transactions."""

    total_credit: Decimal = Decimal("0")
    total_debit: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")
    outstanding_loan_emi: Decimal = Decimal("0")
    other_pending: Decimal = Decimal("0")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating a transaction draft."""

    is_valid: bool = Field(
        ...,
        description="Can the draft be stored?"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def error_messages(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "error"]
