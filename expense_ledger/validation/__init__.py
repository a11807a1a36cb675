"""Input validation package."""

from expense_ledger.validation.validator import (
    ExpenseValidator,
    ValidationRejectedError,
    parse_amount,
    parse_date,
)

__all__ = [
    "ExpenseValidator",
    "ValidationRejectedError",
    "parse_amount",
    "parse_date",
]
