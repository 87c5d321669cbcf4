"""
EMI Calculator

Closed-form amortization for fixed-rate loans repaid in equal monthly
installments.

Degenerate input (a principal, rate or term that is zero, negative or
not finite) is not an error: it yields the zero result. A 0% rate is
only treated as an interest-free loan when allow_zero_rate is set.
"""

import math

from finance_tracker.models.loan import AmortizationRow, LoanResult


MONTHS_PER_YEAR = 12


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _installment(principal: float, monthly_rate: float, months: float) -> float:
    """
    P * r / (1 - (1 + r) ** -n), written with log1p/expm1.

    For very long terms (1 + r) ** n would overflow; here the discount
    factor just tends to 1 and the installment to the interest-only
    payment P * r. Tiny rates keep full precision and tend to P / n.
    """
    paid_down = -math.expm1(-months * math.log1p(monthly_rate))
    if paid_down == 0:
        return principal / months
    return principal * monthly_rate / paid_down


def calculate(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
    allow_zero_rate: bool = False,
) -> LoanResult:
    """
    Compute the monthly installment, total interest and total payment.

    Args:
        principal: Borrowed amount
        annual_rate_percent: Annual interest rate, e.g. 8 for 8%
        term_years: Loan term in years (fractions allowed)
        allow_zero_rate: Treat a 0% rate as principal spread evenly
            over the term instead of returning the zero result

    Returns:
        LoanResult, all zeros for degenerate input
    """
    principal = float(principal)
    rate = float(annual_rate_percent)
    term = float(term_years)

    if not (_is_positive(principal) and _is_positive(term)):
        return LoanResult()

    months = term * MONTHS_PER_YEAR

    if rate == 0 and allow_zero_rate:
        return LoanResult(
            monthly_payment=principal / months,
            total_interest=0.0,
            total_payment=principal,
        )

    if not _is_positive(rate):
        return LoanResult()

    monthly_payment = _installment(principal, rate / 100 / MONTHS_PER_YEAR, months)
    total_payment = monthly_payment * months

    return LoanResult(
        monthly_payment=monthly_payment,
        total_interest=total_payment - principal,
        total_payment=total_payment,
    )


def amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
    allow_zero_rate: bool = False,
) -> list[AmortizationRow]:
    """
    Split every installment into interest and principal.

    The term is rounded up to whole months. The last row absorbs any
    rounding drift so the balance ends at exactly zero.
    Returns an empty list for degenerate input.
    """
    result = calculate(
        principal, annual_rate_percent, term_years, allow_zero_rate=allow_zero_rate
    )
    if result.is_zero:
        return []

    months = math.ceil(float(term_years) * MONTHS_PER_YEAR)
    monthly_rate = float(annual_rate_percent) / 100 / MONTHS_PER_YEAR
    balance = float(principal)
    rows = []

    for month in range(1, months + 1):
        interest = balance * monthly_rate
        if month == months:
            principal_part = balance
        else:
            principal_part = min(max(result.monthly_payment - interest, 0.0), balance)
        balance -= principal_part
        rows.append(AmortizationRow(
            month=month,
            payment=principal_part + interest,
            principal=principal_part,
            interest=interest,
            balance=max(balance, 0.0) if month < months else 0.0,
        ))

    return rows
