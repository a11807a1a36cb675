"""
Tests for the Ledger engine

These exercise flows that cross components: cascading category removal,
audit logging of every mutation, and the filtered export.
"""

import pytest
from datetime import date
from decimal import Decimal

from expense_ledger.audit import AuditLogger
from expense_ledger.categories import InvariantGuardError
from expense_ledger.errors import NotFoundError
from expense_ledger.export import EmptyExportSetError
from expense_ledger.ledger import Ledger
from expense_ledger.models.audit import AuditEventType
from expense_ledger.models.expense import ExpenseDraft, ExpenseFilter
from expense_ledger.store import InMemoryAuditTrail


def event_types(trail: InMemoryAuditTrail) -> list[str]:
    return [event.event_type.value for event in reversed(trail.get_recent_events(1000))]


class TestExpenses:
    """Tests for expense operations through the ledger."""

    def test_add_expense(self, ledger, trail):
        expense = ledger.add_expense("99.90", "Coffee beans", "Food", "2024-08-06")
        assert expense is not None
        assert ledger.expenses() == [expense]
        assert event_types(trail) == ["expense_added"]

    def test_add_defaults_to_default_category(self, ledger):
        expense = ledger.add_expense("5", "Chai")
        assert expense.category == "Food"

    def test_rejected_add_is_audited(self, ledger, trail):
        assert ledger.add_expense("", "Chai", "Food") is None
        assert ledger.expenses() == []
        event = trail.get_recent_events(1)[0]
        assert event.event_type == AuditEventType.EXPENSE_REJECTED
        assert event.details["issues"][0]["field"] == "amount"

    def test_add_draft(self, ledger):
        draft = ledger.new_draft(today=date(2024, 8, 10))
        assert draft.amount == ""
        assert draft.category == "Food"
        assert draft.date == date(2024, 8, 10)

        assert ledger.add_draft(draft) is None
        filled = draft.model_copy(update={"amount": "40", "description": "Samosa"})
        expense = ledger.add_draft(filled)
        assert expense.date == date(2024, 8, 10)

    def test_update_expense(self, sample_ledger, trail):
        assert sample_ledger.update_expense(2, "95", "Auto fare", "Transportation", "2024-08-04") is True
        assert sample_ledger.get_expense(2).amount == Decimal("95")
        assert event_types(trail)[-1] == "expense_updated"

    def test_update_draft_round_trip(self, sample_ledger):
        draft = ExpenseDraft.from_expense(sample_ledger.get_expense(3))
        draft = draft.model_copy(update={"description": "IMAX tickets"})
        assert sample_ledger.update_draft(3, draft) is True
        updated = sample_ledger.get_expense(3)
        assert updated.description == "IMAX tickets"
        assert updated.amount == Decimal("800.00")

    def test_update_unknown_id_is_silent(self, sample_ledger, trail):
        before = sample_ledger.expenses()
        assert sample_ledger.update_expense(999, "1", "x", "Food") is False
        assert sample_ledger.expenses() == before
        assert trail.get_recent_events(1)[0].details["reason"] == "not found"

    def test_update_invalid_values_is_silent(self, sample_ledger, trail):
        before = sample_ledger.expenses()
        assert sample_ledger.update_expense(1, "abc", "x", "Food") is False
        assert sample_ledger.expenses() == before
        assert trail.get_recent_events(1)[0].details["reason"] == "invalid values"

    def test_delete_expense_twice(self, sample_ledger, trail):
        assert sample_ledger.delete_expense(1) is True
        after_once = sample_ledger.expenses()
        assert sample_ledger.delete_expense(1) is False
        assert sample_ledger.expenses() == after_once
        assert event_types(trail)[-2:] == ["expense_deleted", "expense_delete_skipped"]

    def test_get_expense_or_raise(self, sample_ledger):
        assert sample_ledger.get_expense_or_raise(1).description == "Lunch at cafe"
        with pytest.raises(NotFoundError):
            sample_ledger.get_expense_or_raise(999)

    def test_sample_data_only_loads_once(self, ledger):
        assert ledger.load_sample_data() == 5
        assert ledger.load_sample_data() == 0
        assert [e.id for e in ledger.expenses()] == [1, 2, 3, 4, 5]


class TestCategories:
    """Tests for category management and the removal cascade."""

    def test_default_categories(self, ledger):
        assert ledger.categories() == [
            "Food", "Transportation", "Entertainment", "Shopping",
            "Bills", "Healthcare", "Other",
        ]

    def test_add_category(self, ledger, trail):
        assert ledger.add_category("Pets") is True
        assert ledger.categories()[-1] == "Pets"
        assert event_types(trail) == ["category_added"]

    @pytest.mark.parametrize("name", ["", "   ", None, "Food"])
    def test_add_category_rejected(self, ledger, trail, name):
        before = ledger.categories()
        assert ledger.add_category(name) is False
        assert ledger.categories() == before
        assert event_types(trail) == ["category_rejected"]

    def test_remove_category_reassigns_expenses(self, sample_ledger, trail):
        assert sample_ledger.remove_category("Food") is True

        assert "Food" not in sample_ledger.categories()
        assert sample_ledger.get_expense(1).category == "Other"
        assert sample_ledger.get_expense(4).category == "Other"
        assert sample_ledger.get_expense(2).category == "Transportation"

        reassigned = trail.get_recent_events(1)[0]
        assert reassigned.event_type == AuditEventType.EXPENSES_REASSIGNED
        assert reassigned.details["count"] == 2

    def test_remove_unused_category(self, sample_ledger, trail):
        assert sample_ledger.remove_category("Shopping") is True
        assert "Shopping" not in sample_ledger.categories()
        assert event_types(trail)[-1] == "category_removed"

    def test_remove_unregistered_name_still_sweeps(self, ledger):
        expense = ledger.add_expense("10", "Vet visit", "Pets", "2024-08-01")
        assert ledger.remove_category("Pets") is True
        assert ledger.get_expense(expense.id).category == "Other"

    def test_last_category_cannot_be_removed(self, settings):
        ledger = Ledger(categories=["Food"], settings=settings)
        expense = ledger.add_expense("10", "Rice", "Food", "2024-08-01")

        assert ledger.remove_category("Food") is False
        assert ledger.categories() == ["Food"]
        assert ledger.get_expense(expense.id).category == "Food"

    def test_removing_down_to_one(self, settings):
        ledger = Ledger(categories=["Food", "Bills"], settings=settings)
        assert ledger.remove_category("Bills") is True
        assert ledger.remove_category("Food") is False
        assert ledger.categories() == ["Food"]

    def test_fallback_category_removed_then_cascade(self, sample_ledger):
        """
        Removing the fallback itself is allowed, and later cascades still
        move orphaned expenses to it even though it is no longer listed.
        """
        assert sample_ledger.remove_category("Other") is True
        assert "Other" not in sample_ledger.categories()

        assert sample_ledger.remove_category("Entertainment") is True
        assert sample_ledger.get_expense(3).category == "Other"
        assert "Other" not in sample_ledger.categories()

    def test_custom_fallback(self, settings):
        settings = settings.model_copy(update={"fallback_category": "Misc"})
        ledger = Ledger(categories=["Food", "Misc"], settings=settings)
        expense = ledger.add_expense("3", "Bread", "Food", "2024-08-01")
        ledger.remove_category("Food")
        assert ledger.get_expense(expense.id).category == "Misc"

    def test_empty_registry_rejected(self, settings):
        with pytest.raises(InvariantGuardError):
            Ledger(categories=[], settings=settings)


class TestReadViews:
    """Tests for the ledger's summary views."""

    def test_filtered_total(self, sample_ledger):
        assert sample_ledger.total_amount() == Decimal("2780.50")
        assert sample_ledger.total_amount(ExpenseFilter(month="07")) == Decimal("800.00")

    def test_filtered_category_totals(self, sample_ledger):
        totals = sample_ledger.category_totals(ExpenseFilter(category="Transportation"))
        assert totals == {"Transportation": Decimal("330.00")}

    def test_category_analytics_whole_store(self, sample_ledger):
        analytics = sample_ledger.category_analytics()
        assert [a.category for a in analytics] == ["Food", "Entertainment", "Transportation"]

    def test_top_expenses_ignores_filters(self, sample_ledger):
        assert [e.id for e in sample_ledger.top_expenses()] == [4, 3, 1, 5, 2]
        assert [e.id for e in sample_ledger.top_expenses(2)] == [4, 3]

    def test_recent_expenses(self, sample_ledger):
        sample_ledger.add_expense("1", "Newest", "Food", "2024-01-01")
        recent = sample_ledger.recent_expenses()
        assert len(recent) == 5
        assert recent[0].description == "Newest"

    def test_available_years(self, sample_ledger):
        sample_ledger.add_expense("1", "Old", "Food", "2023-12-31")
        assert sample_ledger.available_years() == ["2024", "2023"]

    def test_dashboard_summary(self, sample_ledger):
        summary = sample_ledger.dashboard_summary()
        assert summary.total_amount == Decimal("2780.50")
        assert summary.expense_count == 5
        assert summary.category_count == 7
        assert abs(summary.monthly_average - Decimal("13902.5")) < Decimal("0.0001")
        assert [e.id for e in summary.recent] == [5, 4, 3, 2, 1]

    def test_empty_ledger_views(self, ledger):
        averages = ledger.average_spending()
        assert (averages.daily, averages.weekly, averages.monthly) == (0, 0, 0)
        assert ledger.category_analytics() == []
        assert ledger.top_expenses() == []

    def test_format_currency(self, ledger):
        assert ledger.format_currency(Decimal("2780.5")) == "₹2,780.50"


class TestExport:
    """Tests for exporting through the ledger."""

    def test_export_filtered(self, sample_ledger, trail):
        document = sample_ledger.export(ExpenseFilter(year="2024", month="08"))
        assert document.filename == "expenses_2024_08.csv"
        assert document.record_count == 4
        assert document.content.endswith('"GRAND TOTAL:",,,1980.50')
        assert event_types(trail)[-1] == "export_generated"

    def test_export_all(self, sample_ledger):
        document = sample_ledger.export()
        assert document.filename == "expenses.csv"
        assert document.grand_total == Decimal("2780.50")

    def test_export_summary_matches_export(self, sample_ledger):
        expense_filter = ExpenseFilter(category="Food")
        summary = sample_ledger.export_summary(expense_filter)
        document = sample_ledger.export(expense_filter)
        assert summary.count == document.record_count == 2
        assert summary.total_amount == document.grand_total

    def test_export_empty_store(self, ledger, trail):
        with pytest.raises(EmptyExportSetError):
            ledger.export()
        assert event_types(trail) == ["export_rejected"]

    def test_export_no_matches(self, sample_ledger, trail):
        with pytest.raises(EmptyExportSetError):
            sample_ledger.export(ExpenseFilter(year="2019"))
        rejected = trail.get_recent_events(1)[0]
        assert rejected.details["filters"]["year"] == "2019"

    def test_export_uses_configured_base_name(self, settings):
        settings = settings.model_copy(update={"export_base_filename": "ledger"})
        ledger = Ledger(settings=settings)
        ledger.add_expense("1", "x", "Food", "2024-02-01")
        assert ledger.export(ExpenseFilter(month="02")).filename == "ledger_02.csv"


class TestAuditFailures:
    """Tests that audit problems never break ledger operations."""

    def test_failing_trail_does_not_block_mutation(self, settings):
        class BrokenTrail(InMemoryAuditTrail):
            def append_event(self, event):
                raise RuntimeError("disk full")

        ledger = Ledger(audit_logger=AuditLogger(BrokenTrail()), settings=settings)
        assert ledger.add_expense("1", "x", "Food") is not None
        assert len(ledger.expenses()) == 1


class TestLongNames:
    """Tests that long category names are recorded and audited without error."""

    def test_add_and_remove_long_category(self, ledger, trail):
        name = "x" * 600
        assert ledger.add_category(name) is True
        assert name in ledger.categories()
        assert ledger.remove_category(name) is True
        assert name not in ledger.categories()
        assert event_types(trail) == ["category_added", "category_removed"]

    def test_duplicate_long_category_rejected(self, ledger, trail):
        name = "x" * 600
        ledger.add_category(name)
        assert ledger.add_category(name) is False
        assert event_types(trail)[-1] == "category_rejected"

    def test_expense_with_long_category(self, ledger, trail):
        expense = ledger.add_expense("10", "lunch", "y" * 600, "2024-08-05")
        assert expense is not None
        assert len(ledger.expenses()) == 1
        assert event_types(trail) == ["expense_added"]

    def test_cascade_from_long_category(self, ledger, trail):
        name = "z" * 600
        ledger.add_category(name)
        expense = ledger.add_expense("10", "lunch", name, "2024-08-05")
        assert ledger.remove_category(name) is True
        assert ledger.get_expense(expense.id).category == "Other"
        assert event_types(trail)[-1] == "expenses_reassigned"
