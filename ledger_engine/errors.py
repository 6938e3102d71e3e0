"""
Ledger error taxonomy.

Every failure the engine can report is one of these classes.
Each carries a fixed HTTP status and a fixed detail message;
the underlying storage error is chained as __cause__ and logged,
but never exposed to the caller.
"""


class LedgerError(Exception):
    """Base class for all classified ledger failures."""

    status_code: int = 500
    detail: str = "Internal error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidInput(LedgerError):
    """Request is malformed or rejected by the ledger policy."""
    status_code = 400
    detail = "Invalid input"


class TransactionStartFailed(LedgerError):
    detail = "Failed to start transaction"


class LogAppendFailed(LedgerError):
    detail = "Failed to log transaction"


class BalanceUpdateFailed(LedgerError):
    """
    The conditional balance update failed or matched no rows.

    A missing account and a currency mismatch look the same
    here: both leave the UPDATE with nothing to match.
    """
    detail = "Failed to update account balance"


class CommitFailed(LedgerError):
    detail = "Failed to commit transaction"


class StorageUnavailable(LedgerError):
    detail = "Failed to create account"
