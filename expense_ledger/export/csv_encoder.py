"""
CSV Export Encoder

Produces the downloadable expense report. The layout is the one
compatibility-sensitive artifact of the ledger, so it is fixed:

    Date,Description,Category,Amount
    2024-08-05,"Lunch at cafe",Food,450.5
    ...
    <blank line>
    SUMMARY
    "Food Total:",,,1650.50
    ...
    "GRAND TOTAL:",,,2780.50

Descriptions are always quoted. Lines are joined with "\\n" and the
document has no trailing newline. The encoder builds text only; writing
it anywhere is the caller's business.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence

from expense_ledger.errors import LedgerError
from expense_ledger.models.expense import Expense, ExpenseFilter, ExportDocument
from expense_ledger.queries.analytics import category_totals, total_amount


CSV_HEADER = "Date,Description,Category,Amount"
SUMMARY_MARKER = "SUMMARY"
TWO_PLACES = Decimal("0.01")


class EmptyExportSetError(LedgerError):
    """No expenses match the selected filters, so there is nothing to export."""

    def __init__(self, message: str = "No expenses to download for the selected filters."):
        super().__init__(message)


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def format_amount(amount: Decimal) -> str:
    """Shortest plain form of an amount: 450.50 -> '450.5', 80.00 -> '80'."""
    if amount == 0:
        return "0"
    return format(amount.normalize(), "f")


def format_fixed(amount: Decimal) -> str:
    """Amount with exactly two decimals, rounded half-up."""
    return str(amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def encode_csv(
    expenses: Sequence[Expense],
    totals: Mapping[str, Decimal],
    grand_total: Decimal,
) -> str:
    """
    Encode expenses plus their summary as CSV text.

    Raises:
        EmptyExportSetError: If there are no expenses
    """
    if not expenses:
        raise EmptyExportSetError()

    rows = [
        f"{expense.date.isoformat()},{_quote(expense.description)},"
        f"{expense.category},{format_amount(expense.amount)}"
        for expense in expenses
    ]
    summary = [
        f"{_quote(f'{category} Total:')},,,{format_fixed(total)}"
        for category, total in totals.items()
    ]
    summary.append(f"{_quote('GRAND TOTAL:')},,,{format_fixed(grand_total)}")

    return "\n".join([CSV_HEADER, *rows, "", SUMMARY_MARKER, *summary])


def export_filename(
    expense_filter: Optional[ExpenseFilter] = None,
    base: str = "expenses",
) -> str:
    """
    Suggested filename for an export: base, then _<year>, then _<month>.

    Example: expenses_2024_08.csv
    """
    filename = base
    if expense_filter is not None:
        if expense_filter.year:
            filename += f"_{expense_filter.year}"
        if expense_filter.month:
            filename += f"_{expense_filter.month}"
    return f"{filename}.csv"


def build_export(
    expenses: Sequence[Expense],
    expense_filter: Optional[ExpenseFilter] = None,
    base: str = "expenses",
) -> ExportDocument:
    """
    Encode an already-filtered expense set into an ExportDocument.

    Raises:
        EmptyExportSetError: If there are no expenses
    """
    grand_total = total_amount(expenses)
    content = encode_csv(expenses, category_totals(expenses), grand_total)
    return ExportDocument(
        filename=export_filename(expense_filter, base),
        content=content,
        record_count=len(expenses),
        grand_total=grand_total,
    )
