"""
Pytest configuration and fixtures
"""
import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine
from leave_app.main import app
from leave_app.db.base import Base
from leave_app.core.deps import get_db
from leave_app.tests.helpers import next_workday

# Import all models to ensure they're registered with Base.metadata
from leave_app.models import (
    Employee,
    AuditLog,
    Leave,
    LeaveBalance,
    SpecialLeaveUsage,
    Holiday,
)  # noqa


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
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


@pytest.fixture
def manager(db):
    """Manager K000001 with a full-time contract"""
    employee = Employee(id="K000001", name="Velthoven Jeroen-van", is_manager=True, contract_hours=40)
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def other_manager(db):
    employee = Employee(id="K000002", name="Eszter Nasz", is_manager=True, contract_hours=40)
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def employee(db, manager):
    """Full-time employee K012345 reporting to K000001"""
    employee = Employee(id="K012345", name="Mohammad Farhadi", manager_id=manager.id, contract_hours=40)
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def part_timer(db, manager):
    """32-hour employee K012346 reporting to K000001"""
    employee = Employee(id="K012346", name="Bertold Oravecz", manager_id=manager.id, contract_hours=32)
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def workday() -> date:
    """A future working day, far enough ahead for special leave notice"""
    return next_workday()
