"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from strcalc.db.models import Base
from strcalc.main import create_app
from strcalc.services.snapshots import MemorySnapshotStore, SqlSnapshotStore


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks integration tests")


# Create a shared test database engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create database session for test setup."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def sql_store():
    """Snapshot store on the in-memory test database."""
    return SqlSnapshotStore(session_factory=TestingSessionLocal, key="test-inputs")


@pytest.fixture
def memory_store():
    """Snapshot store with nothing saved yet."""
    return MemorySnapshotStore()


@pytest.fixture
def client(memory_store):
    """Test client with the app's startup and shutdown hooks running."""
    app = create_app(store=memory_store)
    with TestClient(app) as test_client:
        yield test_client
