"""
Database session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.core.config import settings
from app.db.base import Base

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create all tables automatically for SQLite; other databases use Alembic"""
    # Import models so they are registered with Base.metadata
    import app.models  # noqa: F401

    if "sqlite" in settings.DATABASE_URL:
        Base.metadata.create_all(bind=engine)
