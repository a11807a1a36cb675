"""
Data Models Package

This package contains all Pydantic models used by the Expense Ledger engine.
All data flowing through the engine must conform to these schemas.
"""

from expense_ledger.models.expense import (
    AverageSpending,
    CategorySummary,
    DashboardSummary,
    Expense,
    ExpenseDraft,
    ExpenseFilter,
    ExportDocument,
    ExportSummary,
    ValidationIssue,
    ValidationResult,
)
from expense_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "AverageSpending",
    "CategorySummary",
    "DashboardSummary",
    "Expense",
    "ExpenseDraft",
    "ExpenseFilter",
    "ExportDocument",
    "ExportSummary",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
