"""Category taxonomy package."""

from expense_ledger.categories.registry import CategoryRegistry, InvariantGuardError

__all__ = ["CategoryRegistry", "InvariantGuardError"]
