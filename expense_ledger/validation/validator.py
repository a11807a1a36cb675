"""
Expense Input Validation

Raw form values arrive here before anything touches the store.

CHECKS:
- Amount present, parseable as a decimal, finite and non-negative
- Description present and not blank
- Date parseable as an ISO calendar date (missing means today)
- Category names not blank and not already registered

IMPORTANT: Validation NEVER silently fixes issues beyond whitespace
trimming. It reports them so the caller can re-prompt.

Category existence is deliberately NOT checked for expenses: a record's
category is taken verbatim from the caller.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from expense_ledger.models.expense import (
    ExpenseDraft,
    ValidationIssue,
    ValidationResult,
)
from expense_ledger.errors import LedgerError


class ValidationRejectedError(LedgerError):
    """Input failed validation; nothing was changed."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(issue.message for issue in result.issues)
        super().__init__(messages or "Validation failed")


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Parse an amount as entered by the user.

    Returns None when the value is absent or not a usable number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    if not amount.is_finite():
        return None
    return amount


def parse_date(value: Any, today: Optional[dt.date] = None) -> Optional[dt.date]:
    """Parse an ISO date; missing values default to today."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return today or dt.date.today()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip())
    except ValueError:
        return None


class ExpenseValidator:
    """
    Validates expense drafts and category names.

    Stateless apart from an optional fixed "today" used to fill in
    missing dates (handy for tests).
    """

    def __init__(self, today: Optional[dt.date] = None):
        self._today = today

    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        """
        Validate a draft and coerce its values.

        Returns a ValidationResult; when is_valid is True the coerced
        amount, description, category and date are populated.
        """
        issues = []

        amount = parse_amount(draft.amount)
        if amount is None:
            raw = draft.amount
            if raw is None or (isinstance(raw, str) and not raw.strip()):
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Amount is required",
                ))
            else:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message=f"Amount '{raw}' is not a number",
                ))
        elif amount < 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount cannot be negative",
            ))
            amount = None

        description = draft.description or ""
        if not description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
            ))

        expense_date = parse_date(draft.date, self._today)
        if expense_date is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date '{draft.date}' is not a valid YYYY-MM-DD date",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return ValidationResult(
            is_valid=is_valid,
            issues=issues,
            amount=amount,
            description=description if description.strip() else None,
            category=draft.category,
            date=expense_date,
        )

    def require_valid(self, draft: ExpenseDraft) -> ValidationResult:
        """Like validate(), but raises ValidationRejectedError on failure."""
        result = self.validate(draft)
        if not result.is_valid:
            raise ValidationRejectedError(result)
        return result

    def validate_category_name(
        self,
        name: Optional[str],
        existing: Iterable[str],
    ) -> ValidationResult:
        """Check a new category name against the registered ones."""
        issues = []
        if name is None or not name.strip():
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Category name is required",
            ))
        elif name in existing:
            issues.append(ValidationIssue(
                field="name",
                issue_type="duplicate",
                message=f"Category '{name}' already exists",
            ))

        return ValidationResult(
            is_valid=not issues,
            issues=issues,
            category=name if not issues else None,
        )
