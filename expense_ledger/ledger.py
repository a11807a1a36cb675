"""
Ledger Engine

This module ties the components together:
1. Expense store (records)
2. Category registry (names)
3. Filter predicate and aggregation engine (read views)
4. CSV export encoder

DESIGN DECISION: The Ledger holds both the registry and the store, so
category removal and the reassignment of orphaned expenses happen as one
operation here. Neither component reaches into the other.

Presentation state (selected tab, form buffers, which row is being
edited) stays with the caller. The ledger is single-actor: a host with
concurrent event handlers must serialize calls into it.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from expense_ledger.audit import AuditLogger, configure_logging
from expense_ledger.categories import CategoryRegistry
from expense_ledger.config import LedgerSettings, get_settings
from expense_ledger.errors import NotFoundError
from expense_ledger.export import EmptyExportSetError, build_export
from expense_ledger.formatting import format_currency
from expense_ledger.models.expense import (
    AverageSpending,
    CategorySummary,
    DashboardSummary,
    Expense,
    ExpenseDraft,
    ExpenseFilter,
    ExportDocument,
    ExportSummary,
)
from expense_ledger.queries import (
    available_years,
    average_spending,
    category_analytics,
    category_totals,
    filter_expenses,
    recent_expenses,
    top_expenses,
    total_amount,
)
from expense_ledger.store import (
    ExpenseStoreInterface,
    InMemoryAuditTrail,
    InMemoryExpenseStore,
)


AmountInput = Union[str, int, float, Decimal, None]
DateInput = Union[date, str, None]


SAMPLE_EXPENSES = [
    {"amount": "450.50", "description": "Lunch at cafe", "category": "Food", "date": "2024-08-05"},
    {"amount": "80.00", "description": "Auto fare", "category": "Transportation", "date": "2024-08-04"},
    {"amount": "800.00", "description": "Movie tickets", "category": "Entertainment", "date": "2024-07-30"},
    {"amount": "1200.00", "description": "Grocery shopping", "category": "Food", "date": "2024-08-03"},
    {"amount": "250.00", "description": "Metro card recharge", "category": "Transportation", "date": "2024-08-02"},
]


class Ledger:
    """
    The expense ledger engine.

    Mutations return a plain signal (the new Expense or None, True or
    False) and never leave a half-applied change behind. Read views are
    copies; mutating them does not touch the ledger.
    """

    def __init__(
        self,
        store: Optional[ExpenseStoreInterface] = None,
        categories: Optional[Iterable[str]] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
    ):
        self._settings = settings or get_settings()
        self._store = store if store is not None else InMemoryExpenseStore()
        self._registry = CategoryRegistry(
            categories if categories is not None
            else self._settings.default_categories_list
        )
        self._audit = audit_logger or AuditLogger(InMemoryAuditTrail())

    @classmethod
    def from_settings(cls, settings: Optional[LedgerSettings] = None) -> "Ledger":
        """Build a ledger from settings, configuring logging on the way."""
        settings = settings or get_settings()
        configure_logging(settings.log_level, settings.json_logs)
        ledger = cls(settings=settings)
        if settings.load_sample_data:
            ledger.load_sample_data()
        return ledger

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    @property
    def registry(self) -> CategoryRegistry:
        return self._registry

    @property
    def store(self) -> ExpenseStoreInterface:
        return self._store

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit

    @property
    def fallback_category(self) -> str:
        return self._settings.fallback_category

    # =========================================================================
    # EXPENSES
    # =========================================================================

    def add_expense(
        self,
        amount: AmountInput,
        description: Optional[str],
        category: Optional[str] = None,
        date: DateInput = None,
    ) -> Optional[Expense]:
        """
        Record a new expense.

        Returns the stored expense, or None if amount or description
        was missing or invalid (nothing is recorded then).
        """
        if category is None:
            category = self._settings.default_category

        expense = self._store.add(amount, description, category, date)
        if expense is None:
            self._audit.log_expense_rejected(self._last_issues())
            return None

        self._audit.log_expense_added(expense.id, expense.amount, expense.category)
        return expense

    def add_draft(self, draft: ExpenseDraft) -> Optional[Expense]:
        return self.add_expense(draft.amount, draft.description, draft.category, draft.date)

    def update_expense(
        self,
        expense_id: int,
        amount: AmountInput,
        description: Optional[str],
        category: str,
        date: DateInput = None,
    ) -> bool:
        """
        Replace all fields of an existing expense.

        Unknown ids and invalid values are silent no-ops (False).
        """
        if self._store.get(expense_id) is None:
            self._audit.log_expense_update_skipped(expense_id, "not found")
            return False

        if not self._store.update(expense_id, amount, description, category, date):
            self._audit.log_expense_update_skipped(
                expense_id, "invalid values", self._last_issues()
            )
            return False

        updated = self._store.get(expense_id)
        self._audit.log_expense_updated(expense_id, updated.amount)
        return True

    def update_draft(self, expense_id: int, draft: ExpenseDraft) -> bool:
        return self.update_expense(
            expense_id, draft.amount, draft.description, draft.category, draft.date
        )

    def delete_expense(self, expense_id: int) -> bool:
        """Delete an expense. Deleting an unknown id is a no-op (False)."""
        if not self._store.remove(expense_id):
            self._audit.log_expense_delete_skipped(expense_id)
            return False
        self._audit.log_expense_deleted(expense_id)
        return True

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return self._store.get(expense_id)

    def get_expense_or_raise(self, expense_id: int) -> Expense:
        expense = self._store.get(expense_id)
        if expense is None:
            raise NotFoundError(f"Expense {expense_id} not found")
        return expense

    def expenses(self) -> list[Expense]:
        """All expenses in insertion order."""
        return self._store.all()

    def new_draft(self, today: Optional[date] = None) -> ExpenseDraft:
        """A blank form: no amount or description, default category, today."""
        return ExpenseDraft(
            amount="",
            description="",
            category=self._settings.default_category,
            date=today or date.today(),
        )

    def load_sample_data(self) -> int:
        """
        Seed the store with the sample expenses.

        Only runs on an empty store. Returns how many were added.
        """
        if len(self._store) > 0:
            return 0
        added = 0
        for sample in SAMPLE_EXPENSES:
            if self._store.add(**sample) is not None:
                added += 1
        self._audit.log_sample_data_loaded(added)
        return added

    def _last_issues(self) -> list[dict]:
        result = self._store.last_validation
        return result.issues_as_dicts() if result is not None else []

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    def categories(self) -> list[str]:
        return self._registry.list()

    def add_category(self, name: Optional[str]) -> bool:
        """Register a category. Blank and duplicate names are rejected."""
        if not self._registry.add(name):
            issues = self._registry.last_validation.issues
            reason = issues[0].message if issues else "rejected"
            self._audit.log_category_rejected(name, reason)
            return False
        self._audit.log_category_added(name)
        return True

    def remove_category(self, name: str) -> bool:
        """
        Remove a category and move its expenses to the fallback category.

        Refused (False, nothing changes) when it is the last category.

        The fallback name is not protected: if it has itself been removed,
        orphaned expenses still move to it even though it no longer
        appears in categories().
        """
        if not self._registry.remove(name):
            self._audit.log_category_removal_blocked(name, len(self._registry))
            return False

        fallback = self.fallback_category
        moved = self._store.reassign_category(name, fallback)
        self._audit.log_category_removed(name, fallback)
        if moved:
            self._audit.log_expenses_reassigned(name, fallback, moved)
        return True

    # =========================================================================
    # READ VIEWS
    # =========================================================================

    def filtered(self, expense_filter: Optional[ExpenseFilter] = None) -> list[Expense]:
        return filter_expenses(self._store.all(), expense_filter)

    def total_amount(self, expense_filter: Optional[ExpenseFilter] = None) -> Decimal:
        return total_amount(self.filtered(expense_filter))

    def category_totals(
        self,
        expense_filter: Optional[ExpenseFilter] = None,
    ) -> dict[str, Decimal]:
        return category_totals(self.filtered(expense_filter))

    def category_analytics(
        self,
        expense_filter: Optional[ExpenseFilter] = None,
    ) -> list[CategorySummary]:
        """Category breakdown; the whole store unless a filter is given."""
        return category_analytics(self.filtered(expense_filter))

    def top_expenses(self, n: Optional[int] = None) -> list[Expense]:
        """Largest expenses across the whole store."""
        limit = n if n is not None else self._settings.top_expenses_limit
        return top_expenses(self._store.all(), limit)

    def recent_expenses(self, n: Optional[int] = None) -> list[Expense]:
        limit = n if n is not None else self._settings.recent_expenses_limit
        return recent_expenses(self._store.all(), limit)

    def average_spending(self) -> AverageSpending:
        """Spending rates across the whole store."""
        return average_spending(self._store.all())

    def available_years(self) -> list[str]:
        return available_years(self._store.all())

    def dashboard_summary(self) -> DashboardSummary:
        expenses = self._store.all()
        return DashboardSummary(
            total_amount=total_amount(expenses),
            monthly_average=average_spending(expenses).monthly,
            expense_count=len(expenses),
            category_count=len(self._registry),
            recent=self.recent_expenses(),
        )

    def format_currency(self, amount: Decimal) -> str:
        return format_currency(amount, self._settings.currency_symbol)

    # =========================================================================
    # EXPORT
    # =========================================================================

    def export_summary(self, expense_filter: Optional[ExpenseFilter] = None) -> ExportSummary:
        expenses = self.filtered(expense_filter)
        return ExportSummary(count=len(expenses), total_amount=total_amount(expenses))

    def export(self, expense_filter: Optional[ExpenseFilter] = None) -> ExportDocument:
        """
        Export the filtered expenses as CSV.

        Raises:
            EmptyExportSetError: If no expenses match the filter
        """
        expenses = self.filtered(expense_filter)
        try:
            document = build_export(
                expenses,
                expense_filter,
                base=self._settings.export_base_filename,
            )
        except EmptyExportSetError:
            filters = expense_filter.model_dump() if expense_filter else {}
            self._audit.log_export_rejected(filters)
            raise

        self._audit.log_export_generated(
            document.filename, document.record_count, document.grand_total
        )
        return document
