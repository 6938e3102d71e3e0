"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before each test and
dropped after it, so no test data persists.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ledger_engine.main import app
from ledger_engine.api.accounts import get_ledger_service
from ledger_engine.models import Base
from ledger_engine.models.base import get_db
from ledger_engine.services.ledger_service import LedgerService


# Use SQLite for tests, no external database needed.
# SQLite supports UPDATE ... RETURNING, which the ledger relies on.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    This ensures each test starts with a clean database.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for inspecting stored state."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def ledger_service():
    """A ledger service with the default (permissive) policy."""
    return LedgerService(TestSessionLocal)


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    Both the ledger service and the raw session dependency are
    overridden so the app never builds the production engine.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ledger_service] = (
        lambda: LedgerService(TestSessionLocal)
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_engine():
    """The engine behind the test database, for failure injection."""
    return engine


@pytest.fixture
def session_factory():
    """The session factory for the test database."""
    return TestSessionLocal
