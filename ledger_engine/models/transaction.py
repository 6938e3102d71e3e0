"""
Transaction log model.

One row per Deposit or Transfer call, written in the same
database transaction as the balance change it describes.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ledger_engine.models.base import Base


class TransactionRecord(Base):
    """
    Immutable audit record of a balance-affecting request.

    Records are append-only: never updated or deleted.
    target_account_id is NULL for deposits. Account ids are
    plain columns, not foreign keys: whether the account exists
    is decided by the balance update, not by the log insert.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    source_account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, index=True
    )
    target_account_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, nullable=True, index=True
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    currency: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        kind = "TRANSFER" if self.target_account_id else "DEPOSIT"
        return f"<TransactionRecord {kind} {self.amount} {self.currency}>"
