"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from ledger_engine.models.base import Base
from ledger_engine.models.account import Account
from ledger_engine.models.transaction import TransactionRecord

__all__ = [
    "Base",
    "Account",
    "TransactionRecord",
]
