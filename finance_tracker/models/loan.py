"""
Loan Calculator Models

Results of the EMI calculator. Nothing here is persisted;
results are recomputed every time an input changes.
"""

from pydantic import BaseModel, Field


class LoanResult(BaseModel):
    """Loan calculator result."""

    monthly_payment: float = 0.0
    total_interest: float = 0.0
    total_payment: float = 0.0

    @property
    def is_zero(self) -> bool:
        return (
            self.monthly_payment == 0
            and self.total_interest == 0
            and self.total_payment == 0
        )


class AmortizationRow(BaseModel):
    """One month of an amortization schedule."""

    month: int = Field(ge=1)
    payment: float
    principal: float
    interest: float
    balance: float = Field(description="Principal still owed after this payment")
