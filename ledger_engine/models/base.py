"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. The engine and session factory
are built on first use rather than at import time, so the ledger
service can be handed any session factory (tests pass a SQLite one).
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from ledger_engine.config import get_settings


# --- Base Model Class ---
# Every database model (Account, TransactionRecord) inherits
# from this class. SQLAlchemy uses it to track all models and
# generate the correct SQL for table creation.
class Base(DeclarativeBase):
    pass


@lru_cache()
def get_engine() -> Engine:
    """
    Return the process-wide engine.

    The engine manages a pool of database connections.
    pool_pre_ping=True tests connections before using them,
    which handles cases where the database restarted or a
    connection went stale.
    """
    return create_engine(
        get_settings().DATABASE_URL,
        pool_pre_ping=True,
    )


@lru_cache()
def get_session_factory() -> sessionmaker:
    """
    Return the session factory bound to the process engine.

    Each call to the factory creates a new session. Changes are
    only saved on an explicit commit, which gives the all-or-nothing
    behaviour a ledger needs. autoflush=False means SQL is only
    sent when we explicitly flush, execute or commit.
    """
    return sessionmaker(
        bind=get_engine(),
        autocommit=False,
        autoflush=False,
    )


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, preventing connection leaks.
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
