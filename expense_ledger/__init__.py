"""
Expense Ledger - Source Package

A memory-resident personal finance ledger: records expenses, keeps a
mutable category taxonomy, and derives totals, breakdowns, rankings,
spending rates and a CSV export from them.

DESIGN PRINCIPLES:
1. Invalid input is rejected, never half-applied
2. Every mutation is audited
3. Analytics are pure functions over record sequences
4. Presentation state lives outside the engine
"""

from expense_ledger.ledger import Ledger

__version__ = "1.0.0"
__author__ = "Expense Ledger Team"

__all__ = ["Ledger"]
