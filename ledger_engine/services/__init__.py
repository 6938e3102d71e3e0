"""Business logic services."""

from ledger_engine.services.ledger_service import LedgerPolicy, LedgerService

__all__ = ["LedgerPolicy", "LedgerService"]
