"""
In-Memory Store Implementations

The default backends: an ordered expense store and an append-only audit
trail, both living for the length of a session.

Identifiers come from a per-store counter, so they never collide within
a session and always increase.
"""

import itertools
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from expense_ledger.models.audit import AuditEvent
from expense_ledger.models.expense import Expense, ExpenseDraft, ValidationResult
from expense_ledger.store.interface import AuditTrailInterface, ExpenseStoreInterface
from expense_ledger.validation import ExpenseValidator


class InMemoryExpenseStore(ExpenseStoreInterface):
    """
    Expense store backed by a Python list.

    The store only knows about records. It never consults the category
    registry: category names are stored exactly as given.
    """

    def __init__(
        self,
        validator: Optional[ExpenseValidator] = None,
        expenses: Optional[Iterable[Expense]] = None,
    ):
        self._validator = validator or ExpenseValidator()
        self._expenses: list[Expense] = []
        self._last_result: Optional[ValidationResult] = None

        for expense in expenses or []:
            if self._index_of(expense.id) is not None:
                raise ValueError(f"Duplicate expense id: {expense.id}")
            self._expenses.append(expense)

        start = max((e.id for e in self._expenses), default=0) + 1
        self._ids = itertools.count(start)

    @property
    def last_validation(self) -> Optional[ValidationResult]:
        """Validation result of the most recent add/update attempt."""
        return self._last_result

    def _index_of(self, expense_id: int) -> Optional[int]:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        return None

    def _validate(
        self,
        amount: Union[str, int, float, Decimal, None],
        description: Optional[str],
        category: str,
        date: Union[date, str, None],
    ) -> ValidationResult:
        try:
            draft = ExpenseDraft(
                amount=amount,
                description=description,
                category=category,
                date=date,
            )
        except ValidationError as e:
            # Wrong types altogether (e.g. a list for an amount)
            self._last_result = ValidationResult(
                is_valid=False,
                issues=[
                    {
                        "field": ".".join(str(p) for p in err["loc"]) or "draft",
                        "issue_type": "invalid_type",
                        "message": err["msg"],
                    }
                    for err in e.errors()
                ],
            )
            return self._last_result

        self._last_result = self._validator.validate(draft)
        return self._last_result

    def add(
        self,
        amount: Union[str, int, float, Decimal, None],
        description: Optional[str],
        category: str,
        date: Union[date, str, None] = None,
    ) -> Optional[Expense]:
        result = self._validate(amount, description, category, date)
        if not result.is_valid:
            return None

        expense = Expense(
            id=next(self._ids),
            amount=result.amount,
            description=result.description,
            category=result.category,
            date=result.date,
        )
        self._expenses.append(expense)
        return expense

    def update(
        self,
        expense_id: int,
        amount: Union[str, int, float, Decimal, None],
        description: Optional[str],
        category: str,
        date: Union[date, str, None] = None,
    ) -> bool:
        index = self._index_of(expense_id)
        if index is None:
            self._last_result = None
            return False

        result = self._validate(amount, description, category, date)
        if not result.is_valid:
            return False

        self._expenses[index] = Expense(
            id=expense_id,
            amount=result.amount,
            description=result.description,
            category=result.category,
            date=result.date,
        )
        return True

    def remove(self, expense_id: int) -> bool:
        index = self._index_of(expense_id)
        if index is None:
            return False
        del self._expenses[index]
        return True

    def get(self, expense_id: int) -> Optional[Expense]:
        index = self._index_of(expense_id)
        return self._expenses[index] if index is not None else None

    def all(self) -> list[Expense]:
        return list(self._expenses)

    def reassign_category(self, old: str, new: str) -> int:
        changed = 0
        for index, expense in enumerate(self._expenses):
            if expense.category == old:
                self._expenses[index] = expense.with_category(new)
                changed += 1
        return changed

    def __len__(self) -> int:
        return len(self._expenses)


class InMemoryAuditTrail(AuditTrailInterface):
    """Append-only audit trail kept in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            event for event in self._events
            if event.entity_type == entity_type and event.entity_id == entity_id
        ]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

    def __len__(self) -> int:
        return len(self._events)
