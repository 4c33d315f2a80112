import os
import sys
from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Enable application test-mode overrides (isolated DB + header auth)
os.environ.setdefault("TRACKER_TEST_MODE", "1")

# Ensure project root is on sys.path so `import tracker` works in all environments
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tracker.db import Base  # noqa: E402
from tracker.services.data_access import DataAccessService  # noqa: E402

TEST_USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()

    yield session

    session.close()


@pytest.fixture
def store(test_db):
    """Data access for the signed-in test user."""
    return DataAccessService(test_db, TEST_USER_ID)


@pytest.fixture
def store_factory(test_db):
    """Store factory the controllers use, sharing the in-memory session."""
    @contextmanager
    def factory():
        yield DataAccessService(test_db, TEST_USER_ID)
    return factory
