"""
Account API endpoints.

The API layer is thin: it handles HTTP concerns (status codes,
response formatting) and delegates all ledger logic to the
LedgerService. Classified ledger errors are turned into their
fixed status code and message; storage details stay in the logs.
"""

from fastapi import APIRouter, Depends, HTTPException

from ledger_engine.config import get_settings
from ledger_engine.errors import LedgerError
from ledger_engine.models.base import get_session_factory
from ledger_engine.services.ledger_service import LedgerPolicy, LedgerService
from ledger_engine.schemas.account import (
    CreateAccountRequest,
    CreateAccountResponse,
    DepositRequest,
    DepositResponse,
    TransferRequest,
    TransferResponse,
)

router = APIRouter(prefix="/api/accounts", tags=["Accounts"])


def get_ledger_service() -> LedgerService:
    """Build the ledger service from the process-wide session factory."""
    return LedgerService(
        get_session_factory(),
        LedgerPolicy.from_settings(get_settings()),
    )


@router.post("", response_model=CreateAccountResponse, status_code=201)
def create_account(
    request: CreateAccountRequest,
    service: LedgerService = Depends(get_ledger_service),
):
    """Create a new account with a zero balance."""
    try:
        return service.create_account(request)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.post("/add-money", response_model=DepositResponse)
def add_money(
    request: DepositRequest,
    service: LedgerService = Depends(get_ledger_service),
):
    """
    Deposit money into an account.

    Fails unless the account exists and holds the requested
    currency.
    """
    try:
        return service.deposit(request)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)


@router.post("/transfer-money", response_model=TransferResponse)
def transfer_money(
    request: TransferRequest,
    service: LedgerService = Depends(get_ledger_service),
):
    """Transfer money between two accounts of the same currency."""
    try:
        return service.transfer(request)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
