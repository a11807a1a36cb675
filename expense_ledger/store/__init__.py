"""
Store Package

Provides abstract interfaces and in-memory implementations for expense
records and the audit trail. Durable storage is the embedding host's
concern; it plugs in by implementing the same interfaces.
"""

from expense_ledger.store.interface import (
    AuditTrailInterface,
    ExpenseStoreInterface,
    LedgerError,
    NotFoundError,
)
from expense_ledger.store.memory import (
    InMemoryAuditTrail,
    InMemoryExpenseStore,
)

__all__ = [
    # Interfaces
    "AuditTrailInterface",
    "ExpenseStoreInterface",
    # Exceptions
    "LedgerError",
    "NotFoundError",
    # In-memory implementation
    "InMemoryAuditTrail",
    "InMemoryExpenseStore",
]
