import os
import tempfile

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

# The app reads DATABASE_URL when it starts, so point it at a scratch SQLite
# file before anything from employee_api is imported.
_DB_PATH = os.path.join(tempfile.mkdtemp(prefix="employee-api-"), "employee.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"

from employee_api.main import app  # noqa: E402
from employee_api.core.database import Base  # noqa: E402
from employee_api.core.limiter import limiter  # noqa: E402
from employee_api.models.employee import Employee  # noqa: E402

# Sync engine on the same file; creates the schema the service expects to exist
engine = create_engine(f"sqlite:///{_DB_PATH}")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class EmployeeTable:
    """Direct access to the employee table, one short session per call."""

    def count(self) -> int:
        with TestingSessionLocal() as session:
            return session.scalar(select(func.count()).select_from(Employee))

    def get(self, employee_id: int):
        with TestingSessionLocal() as session:
            return session.get(Employee, employee_id)

    def insert(self, **fields) -> int:
        with TestingSessionLocal() as session:
            employee = Employee(**fields)
            session.add(employee)
            session.commit()
            return employee.id

    def drop(self) -> None:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Disable the rate limiter for all tests so rapid requests don't return 429."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture(scope="function")
def table():
    Base.metadata.create_all(bind=engine)
    yield EmployeeTable()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(table):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def rate_limited():
    """Turn the limiter back on with empty counters."""
    limiter.enabled = True
    limiter.reset()
    yield limiter
    limiter.reset()
