"""
Pydantic schemas for account operations.

Field names match the JSON wire format of the /api/accounts
endpoints. Request models only check that required fields are
present and non-empty; currency codes are free-form and amounts
are not sign-checked here (see LedgerPolicy).
"""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# --- Create Account ---

class CreateAccountRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=255)
    currency: str = Field(min_length=1, max_length=16)


class CreateAccountResponse(BaseModel):
    user_id: str
    account_id: uuid.UUID
    currency: str
    amount: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}


# --- Deposit ---

class DepositRequest(BaseModel):
    """Add money to a single account."""
    user_id: str = Field(min_length=1, max_length=255)
    account_id: uuid.UUID
    amount: Decimal = Field(max_digits=19, decimal_places=4)
    currency: str = Field(min_length=1, max_length=16)


class DepositResponse(BaseModel):
    user_id: str
    account_id: uuid.UUID
    total_amount: Decimal
    currency: str


# --- Transfer ---

class TransferRequest(BaseModel):
    """Move money from source to target; both must hold `currency`."""
    user_id: str = Field(min_length=1, max_length=255)
    source_account_id: uuid.UUID
    target_account_id: uuid.UUID
    amount: Decimal = Field(max_digits=19, decimal_places=4)
    currency: str = Field(min_length=1, max_length=16)


class TransferResponse(BaseModel):
    user_id: str
    source_account_id: uuid.UUID
    source_total_amount: Decimal
    source_currency: str
    target_account_id: uuid.UUID
    target_total_amount: Decimal
    target_currency: str
