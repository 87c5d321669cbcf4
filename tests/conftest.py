"""Shared fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.services.storage import InMemoryKeyValueStore
from finance_tracker.store import TransactionStore


@pytest.fixture
def storage():
    return InMemoryKeyValueStore()


@pytest.fixture
def audit_logger(storage):
    return AuditLogger(storage)


@pytest.fixture
def store(storage, audit_logger):
    store = TransactionStore(storage, audit_logger=audit_logger)
    store.load("user_1")
    return store


@pytest.fixture
def make_draft():
    """Build a valid draft dict, overriding any field."""
    def _make(**overrides):
        draft = {
            "name": "Groceries",
            "type": "Debit",
            "amount": Decimal("1200"),
            "date": date(2025, 5, 10),
            "status": "Paid",
        }
        draft.update(overrides)
        return draft
    return _make
