"""
Core Data Models for Expense Ledger

These models define the schemas for all data flowing through the engine.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for export and logging

DESIGN DECISION: An expense carries its category as a plain name, not a
reference into the category registry. Registry changes reach records only
through an explicit sweep (see Ledger.remove_category).
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationInfo,
    Field,
    field_validator,
)


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded expense.

    Only the expense store creates these: it assigns the id and hands over
    already-coerced field values.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        ge=1,
        description="Store-assigned identifier, unique within a session"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount in the ledger currency"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    category: str = Field(
        ...,
        description="Category name (not checked against the registry)"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the expense"
    )

    @property
    def month(self) -> str:
        """Zero-padded two-digit month, e.g. '08'."""
        return f"{self.date.month:02d}"

    @property
    def year(self) -> str:
        """Four-digit year, e.g. '2024'."""
        return f"{self.date.year:04d}"

    def with_category(self, category: str) -> "Expense":
        return self.model_copy(update={"category": category})


class ExpenseDraft(BaseModel):
    """
    Raw field values for a new or edited expense, as typed by the user.

    CRITICAL: This is UNVERIFIED input. Amount is text until the validator
    parses it; nothing here is trusted.
    """

    amount: Union[str, int, float, Decimal, None] = Field(
        default="",
        description="Amount as entered (parsed by the validator)"
    )
    description: Optional[str] = Field(
        default="",
        description="Description as entered"
    )
    category: str = Field(
        default="",
        description="Category name as selected"
    )
    date: Union[dt.date, str, None] = Field(
        default=None,
        description="ISO date (YYYY-MM-DD); None means today"
    )

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseDraft":
        """Editable copy of a stored expense (edit-form buffer)."""
        return cls(
            amount=str(expense.amount),
            description=expense.description,
            category=expense.category,
            date=expense.date,
        )


# =============================================================================
# FILTER MODEL
# =============================================================================

class ExpenseFilter(BaseModel):
    """
    Active month/year/category constraints.

    An absent constraint matches everything. Empty strings (a cleared
    selection) count as absent.
    """
    model_config = ConfigDict(frozen=True)

    month: Optional[str] = Field(
        default=None,
        pattern=r"^(0[1-9]|1[0-2])$",
        description="Two-digit month, '01'..'12'"
    )
    year: Optional[str] = Field(
        default=None,
        pattern=r"^\d{4}$",
        description="Four-digit year"
    )
    category: Optional[str] = Field(
        default=None,
        description="Exact category name"
    )

    @field_validator('month', 'year', 'category', mode='before')
    @classmethod
    def blank_is_absent(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, str) and v == "":
            return None
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        # Accept '8' as well as '08'
        if info.field_name == "month" and isinstance(v, str) and v.isdigit() and len(v) == 1:
            return v.zfill(2)
        return v

    @property
    def is_active(self) -> bool:
        return any((self.month, self.year, self.category))


# =============================================================================
# ANALYTICS MODELS
# =============================================================================

class CategorySummary(BaseModel):
    """One row of the per-category breakdown."""

    category: str
    total: Decimal
    count: int = Field(ge=0)
    percentage: str = Field(
        ...,
        description="Share of the grand total, one decimal place, e.g. '84.9'"
    )


class AverageSpending(BaseModel):
    """Time-normalized spending rates."""

    daily: Decimal = Decimal("0")
    weekly: Decimal = Decimal("0")
    monthly: Decimal = Decimal("0")


class DashboardSummary(BaseModel):
    """Headline numbers for the dashboard view."""

    total_amount: Decimal
    monthly_average: Decimal
    expense_count: int = Field(ge=0)
    category_count: int = Field(ge=0)
    recent: list[Expense] = Field(default_factory=list)


class ExportSummary(BaseModel):
    """Preview of what an export would contain."""

    count: int = Field(ge=0)
    total_amount: Decimal


# =============================================================================
# EXPORT MODEL
# =============================================================================

class ExportDocument(BaseModel):
    """
    An encoded export, ready to hand to whatever writes or downloads it.

    The engine never touches the filesystem.
    """

    filename: str
    content: str
    media_type: str = "text/csv;charset=utf-8"
    record_count: int = Field(ge=1)
    grand_total: Decimal

    def to_bytes(self) -> bytes:
        return self.content.encode("utf-8")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'duplicate')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Outcome of validating a draft.

    When valid, the coerced values are filled in and ready for the store.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    # Coerced values (only set when the corresponding field parsed)
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[dt.date] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def issues_as_dicts(self) -> list[dict]:
        return [issue.model_dump() for issue in self.issues]
