"""
Ledger Exceptions

Every error the engine defines derives from LedgerError. None of them is
fatal: operations that fail leave prior state untouched.
"""


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class NotFoundError(LedgerError):
    """No expense with the requested id."""
    pass
