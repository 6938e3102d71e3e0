"""
Account model.

An account holds a single running balance in one currency.
The balance is stored, not derived: Deposit and Transfer change
it in place with conditional UPDATE statements.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ledger_engine.models.base import Base


class Account(Base):
    """
    A balance owned by a user.

    currency is fixed at creation. amount is signed: nothing
    in the schema stops it from going below zero.
    """

    __tablename__ = "accounts"

    account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    currency: Mapped[str] = mapped_column(String(16), nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0"), server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Account {self.account_id} {self.amount} {self.currency}>"
