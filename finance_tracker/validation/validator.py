"""
Transaction Validation

Checks a TransactionDraft before it reaches the store.

Required fields (name, amount, date) must be present: a draft missing
any of them is rejected as a whole and nothing is stored. Suspicious
but legal values are reported as warnings and do not block.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the form can show them to the user.
"""

from decimal import Decimal

from finance_tracker.models.transaction import (
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
)


class TransactionValidator:
    """Validates transaction drafts from the add/edit form."""

    def validate(self, draft: TransactionDraft) -> ValidationResult:
        """
        Validate a draft.

        Returns a ValidationResult; is_valid is False when any
        error-level issue was found.
        """
        issues = self._check_required(draft) + self._check_values(draft)
        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def _check_required(self, draft: TransactionDraft) -> list[ValidationIssue]:
        issues = []

        if not draft.name:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Name is required",
                severity="error",
            ))

        if draft.amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            ))

        if draft.date is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
                severity="error",
            ))

        return issues

    def _check_values(self, draft: TransactionDraft) -> list[ValidationIssue]:
        issues = []

        if draft.amount is not None and draft.amount == Decimal("0"):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="Amount is zero",
                severity="warning",
            ))

        if draft.type.is_loan and (draft.interest_rate is None or draft.loan_term is None):
            issues.append(ValidationIssue(
                field="interest_rate" if draft.interest_rate is None else "loan_term",
                issue_type="missing",
                message=f"{draft.type.value} has no interest rate or term",
                severity="info",
            ))

        return issues
