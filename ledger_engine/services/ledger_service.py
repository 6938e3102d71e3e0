"""
Ledger service: the core of the system.

This service enforces the fundamental rules:
1. Every Deposit and Transfer appends exactly one transaction
   record in the same database transaction as its balance change
2. Balance changes only apply when the account's stored currency
   matches the requested currency
3. A transfer debits and credits the same amount, or does nothing
4. Any failure rolls back everything written so far

There is no application-level locking. Each balance change is a
single conditional UPDATE filtered by account id and currency.
The row lock it takes is held until commit, so concurrent
operations on the same account serialize in the database. An
UPDATE that matches no rows (unknown account, wrong currency)
aborts the whole unit of work.
"""

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from sqlalchemy import update
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ledger_engine.config import Settings
from ledger_engine.errors import (
    InvalidInput,
    TransactionStartFailed,
    LogAppendFailed,
    BalanceUpdateFailed,
    CommitFailed,
    StorageUnavailable,
)
from ledger_engine.models.account import Account
from ledger_engine.models.transaction import TransactionRecord
from ledger_engine.schemas.account import (
    CreateAccountRequest,
    CreateAccountResponse,
    DepositRequest,
    DepositResponse,
    TransferRequest,
    TransferResponse,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerPolicy:
    """
    Optional business rules on top of the core engine.

    The defaults accept negative balances, self-transfers and
    non-positive amounts. Each rule can be switched on without
    touching the engine.
    """

    allow_negative_balance: bool = True
    allow_self_transfer: bool = True
    require_positive_amount: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "LedgerPolicy":
        return cls(
            allow_negative_balance=settings.ALLOW_NEGATIVE_BALANCE,
            allow_self_transfer=settings.ALLOW_SELF_TRANSFER,
            require_positive_amount=settings.REQUIRE_POSITIVE_AMOUNT,
        )


class LedgerService:
    """
    All balance-affecting operations pass through this service.

    The service is given a session factory, not a session. Every
    operation opens its own session, owns it exclusively for the
    duration of the call, and closes it on every exit path. The
    service decides when to commit or roll back.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        policy: LedgerPolicy | None = None,
    ):
        self.session_factory = session_factory
        self.policy = policy or LedgerPolicy()

    def create_account(self, request: CreateAccountRequest) -> CreateAccountResponse:
        """
        Create an account with a zero balance.

        A single insert, so there is nothing to reconcile. Any
        storage error is reported as StorageUnavailable.
        """
        session = self.session_factory()
        try:
            account = Account(
                user_id=request.user_id,
                currency=request.currency,
                amount=Decimal("0"),
            )
            session.add(account)
            session.flush()
            response = CreateAccountResponse.model_validate(account)
            session.commit()
        except SQLAlchemyError as e:
            self._rollback(session)
            logger.error(
                "Failed to create account for user %s: %s", request.user_id, e
            )
            raise StorageUnavailable() from e
        finally:
            session.close()

        logger.info(
            "Created account %s (%s) for user %s",
            response.account_id, response.currency, response.user_id,
        )
        return response

    def deposit(self, request: DepositRequest) -> DepositResponse:
        """
        Add money to an account.

        Steps, in one database transaction:
        1. Append the transaction record (no target account)
        2. amount = amount + requested, where id and currency match
        3. Commit

        Replaying the same request deposits twice; there is no
        deduplication.
        """
        self._check_amount(request.amount)

        with self._unit_of_work() as session:
            self._append_record(
                session,
                user_id=request.user_id,
                source_account_id=request.account_id,
                target_account_id=None,
                amount=request.amount,
                currency=request.currency,
            )
            row = self._apply_delta(
                session, request.account_id, request.currency, request.amount
            )
            self._commit(session)

        logger.info(
            "Deposited %s %s into account %s",
            request.amount, request.currency, request.account_id,
        )
        return DepositResponse(
            user_id=request.user_id,
            account_id=request.account_id,
            total_amount=row.amount,
            currency=request.currency,
        )

    def transfer(self, request: TransferRequest) -> TransferResponse:
        """
        Move money from one account to another.

        Steps, in one database transaction, strictly in order:
        1. Append one transaction record naming both accounts
        2. Debit the source, where id and currency match
        3. Credit the target, where id and currency match
        4. Commit

        Debit and credit use the same amount, so a committed
        transfer leaves source + target unchanged. If the credit
        fails the debit is rolled back with it.
        """
        self._check_amount(request.amount)
        if (
            not self.policy.allow_self_transfer
            and request.source_account_id == request.target_account_id
        ):
            logger.warning(
                "Rejected transfer from account %s to itself",
                request.source_account_id,
            )
            raise InvalidInput()

        with self._unit_of_work() as session:
            self._append_record(
                session,
                user_id=request.user_id,
                source_account_id=request.source_account_id,
                target_account_id=request.target_account_id,
                amount=request.amount,
                currency=request.currency,
            )
            source = self._apply_delta(
                session,
                request.source_account_id,
                request.currency,
                -request.amount,
            )
            target = self._apply_delta(
                session,
                request.target_account_id,
                request.currency,
                request.amount,
            )
            self._commit(session)

        logger.info(
            "Transferred %s %s from account %s to account %s",
            request.amount, request.currency,
            request.source_account_id, request.target_account_id,
        )
        return TransferResponse(
            user_id=request.user_id,
            source_account_id=request.source_account_id,
            source_total_amount=source.amount,
            source_currency=source.currency,
            target_account_id=request.target_account_id,
            target_total_amount=target.amount,
            target_currency=target.currency,
        )

    # --- Unit of work steps ---

    @contextmanager
    def _unit_of_work(self) -> Iterator[Session]:
        """
        Open a session with a live transaction and guarantee cleanup.

        Checking out the connection up front means a database that
        cannot be reached is reported as TransactionStartFailed,
        before anything is written. Any exception raised inside the
        block rolls the transaction back before it propagates.
        """
        session = self.session_factory()
        try:
            try:
                session.connection()
            except SQLAlchemyError as e:
                logger.error("Failed to start transaction: %s", e)
                raise TransactionStartFailed() from e
            yield session
        except Exception:
            self._rollback(session)
            raise
        finally:
            session.close()

    def _append_record(
        self,
        session: Session,
        *,
        user_id: str,
        source_account_id: uuid.UUID,
        target_account_id: uuid.UUID | None,
        amount: Decimal,
        currency: str,
    ) -> TransactionRecord:
        record = TransactionRecord(
            user_id=user_id,
            source_account_id=source_account_id,
            target_account_id=target_account_id,
            amount=amount,
            currency=currency,
        )
        session.add(record)
        try:
            session.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to log transaction: %s", e)
            raise LogAppendFailed() from e
        return record

    def _apply_delta(
        self,
        session: Session,
        account_id: uuid.UUID,
        currency: str,
        delta: Decimal,
    ) -> Row:
        """
        Add delta to the account balance and return (amount, currency).

        The currency check is part of the WHERE clause, so check and
        update are one statement. With negative balances disallowed,
        a debit (negative delta) must also leave the balance at or
        above zero; credits always apply, even to an overdrawn account.
        """
        conditions = [
            Account.account_id == account_id,
            Account.currency == currency,
        ]
        if not self.policy.allow_negative_balance and delta < 0:
            conditions.append(Account.amount + delta >= 0)

        stmt = (
            update(Account)
            .where(*conditions)
            .values(amount=Account.amount + delta)
            .returning(Account.amount, Account.currency)
            .execution_options(synchronize_session=False)
        )
        try:
            row = session.execute(stmt).first()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to update balance of account %s: %s", account_id, e
            )
            raise BalanceUpdateFailed() from e

        if row is None:
            logger.error(
                "Failed to update balance of account %s: "
                "no account matched in currency %s",
                account_id, currency,
            )
            raise BalanceUpdateFailed()
        return row

    def _rollback(self, session: Session) -> None:
        """
        Roll back, keeping the original failure as the one raised.

        A rollback on a dead connection can fail too; that error is
        logged and dropped so the caller still sees the classified
        LedgerError. Closing the session releases the connection.
        """
        try:
            session.rollback()
        except SQLAlchemyError as e:
            logger.error("Failed to roll back transaction: %s", e)

    def _commit(self, session: Session) -> None:
        try:
            session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to commit transaction: %s", e)
            raise CommitFailed() from e

    def _check_amount(self, amount: Decimal) -> None:
        if self.policy.require_positive_amount and amount <= 0:
            logger.warning("Rejected non-positive amount %s", amount)
            raise InvalidInput()
