"""Shared fixtures for the ledger tests."""

from datetime import date

import pytest

from expense_ledger.config import LedgerSettings
from expense_ledger.ledger import Ledger
from expense_ledger.store import InMemoryAuditTrail, InMemoryExpenseStore
from expense_ledger.audit import AuditLogger
from expense_ledger.validation import ExpenseValidator


TODAY = date(2024, 8, 10)


@pytest.fixture
def settings() -> LedgerSettings:
    """Default settings, ignoring any .env file."""
    return LedgerSettings(_env_file=None)


@pytest.fixture
def trail() -> InMemoryAuditTrail:
    return InMemoryAuditTrail()


@pytest.fixture
def store() -> InMemoryExpenseStore:
    return InMemoryExpenseStore(validator=ExpenseValidator(today=TODAY))


@pytest.fixture
def ledger(settings, store, trail) -> Ledger:
    """An empty ledger with the default categories."""
    return Ledger(store=store, audit_logger=AuditLogger(trail), settings=settings)


@pytest.fixture
def sample_ledger(ledger) -> Ledger:
    """A ledger holding the five sample expenses (ids 1-5)."""
    ledger.load_sample_data()
    return ledger
