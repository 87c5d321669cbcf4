"""
Finance Tracker - Source Package

A personal finance tracker for recording income, expenses and loans,
with running summaries and an EMI calculator.

DESIGN PRINCIPLES:
1. Arithmetic is pure and deterministic
2. Reject bad input loudly, never half-apply it
3. Every mutation is written back immediately
4. Every significant action is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
