"""Filtering and aggregation package."""

from expense_ledger.queries.analytics import (
    available_years,
    average_spending,
    category_analytics,
    category_totals,
    day_span,
    recent_expenses,
    top_expenses,
    total_amount,
)
from expense_ledger.queries.filters import (
    ExpensePredicate,
    build_predicate,
    filter_expenses,
)

__all__ = [
    "ExpensePredicate",
    "available_years",
    "average_spending",
    "build_predicate",
    "category_analytics",
    "category_totals",
    "day_span",
    "filter_expenses",
    "recent_expenses",
    "top_expenses",
    "total_amount",
]
