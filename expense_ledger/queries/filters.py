"""
Filter Predicate

Composes the optional month/year/category constraints into one predicate.
Absent constraints match everything; present ones are ANDed.
"""

from typing import Callable, Iterable, Optional

from expense_ledger.models.expense import Expense, ExpenseFilter


ExpensePredicate = Callable[[Expense], bool]


def build_predicate(expense_filter: Optional[ExpenseFilter] = None) -> ExpensePredicate:
    """Build a predicate for the given filter (None matches everything)."""
    expense_filter = expense_filter or ExpenseFilter()
    month = expense_filter.month
    year = expense_filter.year
    category = expense_filter.category

    def predicate(expense: Expense) -> bool:
        matches_month = not month or expense.month == month
        matches_year = not year or expense.year == year
        matches_category = not category or expense.category == category
        return matches_month and matches_year and matches_category

    return predicate


def filter_expenses(
    expenses: Iterable[Expense],
    expense_filter: Optional[ExpenseFilter] = None,
) -> list[Expense]:
    """Return the matching expenses in their original order."""
    predicate = build_predicate(expense_filter)
    return [expense for expense in expenses if predicate(expense)]
