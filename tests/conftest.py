import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from hr_admin.main import app
from hr_admin.db.session import Base, get_db
from hr_admin.models.employee import Employee

# Test database: one in-memory SQLite database shared across threads
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Create fresh tables and a session for each test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Create test client with database override"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_employee(db_session, name, email, manager_id=None, is_active=True):
    employee = Employee(
        name=name,
        surname="Test",
        email=email,
        hire_date=date(2020, 1, 6),
        manager_id=manager_id,
        is_active=is_active
    )
    db_session.add(employee)
    db_session.commit()
    db_session.refresh(employee)
    return employee


@pytest.fixture
def employee(db_session):
    """Create an active employee with no manager"""
    return make_employee(db_session, "Employee", "employee_test@test.com")


@pytest.fixture
def manager(db_session):
    """Create an active employee to act as a manager"""
    return make_employee(db_session, "Manager", "manager_test@test.com")
