"""
Abstract Store Interfaces

DESIGN DECISION: The engine talks to its record store and audit trail
through abstract interfaces. This allows us to:
1. Keep the engine memory-resident by default
2. Let an embedding host plug in durable storage without touching
   ledger logic
3. Swap in fakes for testing

The interface is intentionally small: create, replace, delete, read in
insertion order, and the bulk category sweep needed by cascades.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from expense_ledger.errors import LedgerError, NotFoundError
from expense_ledger.models.audit import AuditEvent
from expense_ledger.models.expense import Expense, ValidationResult


class ExpenseStoreInterface(ABC):
    """
    Abstract interface for expense record storage.

    Records are kept in insertion order; that order is the display order
    for every read view.
    """

    @abstractmethod
    def add(
        self,
        amount: Union[str, int, float, Decimal, None],
        description: Optional[str],
        category: str,
        date: Union[date, str, None] = None,
    ) -> Optional[Expense]:
        """
        Create and append a new expense.

        Args:
            amount: Amount as entered; parsed to a decimal
            description: Non-empty description
            category: Category name, taken verbatim
            date: ISO date string or date; None means today

        Returns:
            The stored expense, or None if the input was rejected
            (nothing is appended in that case)
        """
        pass

    @abstractmethod
    def update(
        self,
        expense_id: int,
        amount: Union[str, int, float, Decimal, None],
        description: Optional[str],
        category: str,
        date: Union[date, str, None] = None,
    ) -> bool:
        """
        Replace every field of the expense with the given id.

        Returns:
            True if a record was replaced. Unknown ids and invalid
            replacements are silent no-ops returning False.
        """
        pass

    @abstractmethod
    def remove(self, expense_id: int) -> bool:
        """
        Delete the expense with the given id.

        Returns:
            True if a record was deleted, False if it was not there
        """
        pass

    @abstractmethod
    def get(self, expense_id: int) -> Optional[Expense]:
        """Return the expense with the given id, or None."""
        pass

    @abstractmethod
    def all(self) -> list[Expense]:
        """Return all expenses in insertion order (a copy)."""
        pass

    @abstractmethod
    def reassign_category(self, old: str, new: str) -> int:
        """
        Rewrite the category of every expense currently in `old` to `new`.

        Returns:
            Number of expenses changed
        """
        pass

    @property
    @abstractmethod
    def last_validation(self) -> Optional[ValidationResult]:
        """
        Validation result of the most recent add/update attempt.

        None before any attempt and after an update of an unknown id.
        The ledger reads the rejection issues from here for its audit
        events.
        """
        pass

    def __len__(self) -> int:
        return len(self.all())


class AuditTrailInterface(ABC):
    """
    Abstract interface for audit trail storage.

    Audit trails are append-only - we never delete or modify events.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the trail.

        Returns:
            True if recorded successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity, oldest first.
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events, newest first.
        """
        pass


__all__ = [
    "AuditTrailInterface",
    "ExpenseStoreInterface",
    "LedgerError",
    "NotFoundError",
]
