"""
Pytest configuration and fixtures
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.db.base import Base
from app.core.deps import get_db

# Import all models to ensure they're registered with Base.metadata
from app.models import Employee, LeaveRequest  # noqa: F401


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@dataclass
class Leave:
    """Plain leave record for calculator tests that need no database"""
    start_date: date
    end_date: date
    type: str = "annual"
    status: str = "approved"
    user_id: int = 1
    id: Optional[int] = None


@pytest.fixture
def make_leave():
    """Factory for plain leave records: make_leave('2024-01-15', type='halfday')"""
    def _make(start: str, end: Optional[str] = None, **kwargs) -> Leave:
        return Leave(
            start_date=date.fromisoformat(start),
            end_date=date.fromisoformat(end or start),
            **kwargs
        )
    return _make
