"""
Database session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from leave_app.core.config import settings
from leave_app.db.base import Base

connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables() -> None:
    """Create all tables automatically (SQLite only; other databases use Alembic)"""
    # Import models so they are registered on Base.metadata
    import leave_app.models  # noqa: F401

    if "sqlite" in settings.DATABASE_URL:
        Base.metadata.create_all(bind=engine)
