"""
Category Registry

An ordered set of category names. Insertion order is display order.

INVARIANTS:
- No two entries are equal (exact, case-sensitive comparison)
- No entry is blank
- The registry is never empty: the last category cannot be removed

The registry knows nothing about expenses. Reassigning orphaned records
after a removal is the Ledger's job.
"""

from typing import Iterable, Optional

from expense_ledger.errors import LedgerError
from expense_ledger.models.expense import ValidationResult
from expense_ledger.validation import ExpenseValidator


class InvariantGuardError(LedgerError):
    """The request would leave the registry empty."""
    pass


class CategoryRegistry:
    """Ordered, duplicate-free list of category names."""

    def __init__(
        self,
        names: Iterable[str],
        validator: Optional[ExpenseValidator] = None,
    ):
        self._validator = validator or ExpenseValidator()
        self._names: list[str] = []
        for name in names:
            if name and name.strip() and name not in self._names:
                self._names.append(name)
        if not self._names:
            raise InvariantGuardError("A category registry needs at least one category")
        self._last_result: Optional[ValidationResult] = None

    @property
    def last_validation(self) -> Optional[ValidationResult]:
        return self._last_result

    def add(self, name: Optional[str]) -> bool:
        """
        Append a category.

        Returns False (and changes nothing) if the name is blank or
        already registered.
        """
        self._last_result = self._validator.validate_category_name(name, self._names)
        if not self._last_result.is_valid:
            return False
        self._names.append(name)
        return True

    def can_remove(self) -> bool:
        return len(self._names) > 1

    def remove(self, name: str) -> bool:
        """
        Remove a category.

        Returns False when only one category is left (nothing changes).
        Otherwise the name is dropped if present and True is returned,
        even if the name was never registered, since callers still need
        to sweep records carrying it.
        """
        if not self.can_remove():
            return False
        if name in self._names:
            self._names.remove(name)
        return True

    def list(self) -> list[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self):
        return iter(list(self._names))
