"""Display helpers for amounts and month pickers."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


MONTHS: list[tuple[str, str]] = [
    ("01", "January"), ("02", "February"), ("03", "March"),
    ("04", "April"), ("05", "May"), ("06", "June"),
    ("07", "July"), ("08", "August"), ("09", "September"),
    ("10", "October"), ("11", "November"), ("12", "December"),
]


def month_label(value: str) -> str:
    """'08' -> 'August'. Unknown values raise KeyError."""
    return dict(MONTHS)[value]


def format_currency(amount: Union[Decimal, int, float], symbol: str = "₹") -> str:
    """Format an amount for display, e.g. '₹1,250.50'."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{symbol}{value:,.2f}"
