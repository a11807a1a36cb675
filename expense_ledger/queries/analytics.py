"""
Aggregation Engine

DESIGN DECISION: Every aggregation is a pure function over a sequence of
expenses. Nothing here reads the store or keeps state; the caller decides
whether to pass the filtered set or the whole store.

All arithmetic stays in Decimal so totals match what was entered.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from expense_ledger.models.expense import AverageSpending, CategorySummary, Expense


ZERO = Decimal("0")
ONE_PLACE = Decimal("0.1")


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    """Sum of amounts; 0 for no expenses."""
    return sum((expense.amount for expense in expenses), ZERO)


def category_totals(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """
    Sum of amounts per category, in first-seen order.

    Categories without expenses in the input are absent, not zero.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount
    return totals


def _percentage(part: Decimal, whole: Decimal) -> str:
    if whole <= 0:
        return "0"
    share = (part * 100 / whole).quantize(ONE_PLACE, rounding=ROUND_HALF_UP)
    return str(share)


def category_analytics(expenses: Iterable[Expense]) -> list[CategorySummary]:
    """
    Per-category total, count and share of the grand total.

    Sorted by total, largest first. Ties keep first-seen order.
    """
    groups: dict[str, dict] = {}
    for expense in expenses:
        group = groups.setdefault(
            expense.category,
            {"total": ZERO, "count": 0},
        )
        group["total"] += expense.amount
        group["count"] += 1

    grand_total = sum((group["total"] for group in groups.values()), ZERO)

    summaries = [
        CategorySummary(
            category=category,
            total=group["total"],
            count=group["count"],
            percentage=_percentage(group["total"], grand_total),
        )
        for category, group in groups.items()
    ]
    return sorted(summaries, key=lambda summary: summary.total, reverse=True)


def top_expenses(expenses: Iterable[Expense], n: int = 5) -> list[Expense]:
    """The n largest expenses, descending. Ties keep their input order."""
    if n <= 0:
        return []
    ranked = sorted(expenses, key=lambda expense: expense.amount, reverse=True)
    return ranked[:n]


def recent_expenses(expenses: Sequence[Expense], n: int = 5) -> list[Expense]:
    """The last n expenses added, newest first."""
    if n <= 0:
        return []
    return list(reversed(expenses[-n:]))


def day_span(expenses: Sequence[Expense]) -> int:
    """
    Days between the earliest and latest expense date, floored to 1.
    """
    if not expenses:
        return 1
    dates = [expense.date for expense in expenses]
    return max(1, (max(dates) - min(dates)).days)


def average_spending(expenses: Sequence[Expense]) -> AverageSpending:
    """
    Daily, weekly and monthly spending rates.

    daily = total / day_span; weekly = daily * 7; monthly = daily * 30
    (a flat 30-day month).
    """
    if not expenses:
        return AverageSpending(daily=ZERO, weekly=ZERO, monthly=ZERO)

    daily = total_amount(expenses) / Decimal(day_span(expenses))
    return AverageSpending(
        daily=daily,
        weekly=daily * 7,
        monthly=daily * 30,
    )


def available_years(expenses: Iterable[Expense]) -> list[str]:
    """Distinct expense years, newest first (filter options)."""
    return sorted({expense.year for expense in expenses}, reverse=True)
