import logging
from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.core.errors import StorageError
from employee_api.models.employee import Employee
from employee_api.schemas.employee import EmployeeIn

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Log a driver failure with its detail and re-raise it as StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(f"There is an error while {action}")
        raise StorageError(action) from exc


def _column_values(data: EmployeeIn) -> dict:
    return {
        "firstname": data.fname,
        "lastname": data.lname,
        "age": data.age,
        "gender": data.gender,
        "role": data.role,
    }


class EmployeeRepository:
    """Parameterized statements against the ``employee`` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[Employee]:
        with _storage_errors("listing employees"):
            result = await self.db.execute(select(Employee))
            return list(result.scalars().all())

    async def create(self, data: EmployeeIn) -> int:
        with _storage_errors("creating an employee"):
            employee = Employee(**_column_values(data))
            self.db.add(employee)
            await self.db.commit()
            return employee.id

    async def update(self, employee_id: int, data: EmployeeIn) -> int:
        """Rewrite every field of one row; returns the number of matched rows."""
        with _storage_errors(f"updating employee {employee_id}"):
            result = await self.db.execute(
                update(Employee)
                .where(Employee.id == employee_id)
                .values(**_column_values(data))
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
            return result.rowcount

    async def delete(self, employee_id: int) -> int:
        with _storage_errors(f"deleting employee {employee_id}"):
            result = await self.db.execute(
                delete(Employee)
                .where(Employee.id == employee_id)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
            return result.rowcount

    async def search_by_first_name(self, prefix: str) -> List[Employee]:
        # LIKE wildcards inside the prefix are escaped, so matching is a plain prefix test
        with _storage_errors(f"searching employees by prefix {prefix!r}"):
            result = await self.db.execute(
                select(Employee).where(
                    Employee.firstname.startswith(prefix, autoescape=True)
                )
            )
            return list(result.scalars().all())
