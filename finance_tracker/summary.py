"""
Summary Aggregation

Reduces a collection of transactions to the totals shown on the
dashboard. Pure: the input is not validated or modified.
"""

from decimal import Decimal
from typing import Iterable

from finance_tracker.models.transaction import (
    Transaction,
    TransactionSummary,
    TransactionType,
)


def summarize(transactions: Iterable[Transaction]) -> TransactionSummary:
    """
    Compute dashboard totals.

    - Credit and Debit totals count every record of that type
    - Net balance is credit minus debit
    - Pending Loan/EMI records are outstanding loans; every other
      pending record is "other pending"
    """
    total_credit = Decimal("0")
    total_debit = Decimal("0")
    outstanding_loan_emi = Decimal("0")
    other_pending = Decimal("0")

    for tx in transactions:
        if tx.type == TransactionType.CREDIT:
            total_credit += tx.amount
        elif tx.type == TransactionType.DEBIT:
            total_debit += tx.amount

        if tx.is_pending:
            if tx.is_loan:
                outstanding_loan_emi += tx.amount
            else:
                other_pending += tx.amount

    return TransactionSummary(
        total_credit=total_credit,
        total_debit=total_debit,
        net_balance=total_credit - total_debit,
        outstanding_loan_emi=outstanding_loan_emi,
        other_pending=other_pending,
    )
