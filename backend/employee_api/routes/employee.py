import logging
import re
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.core.database import get_db
from employee_api.core.limiter import rate_limit
from employee_api.repositories.employee import EmployeeRepository
from employee_api.schemas.employee import EmployeeResponse
from employee_api.validation import validate_employee

router = APIRouter()
logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found."

_ID_RE = re.compile(r"[+-]?[0-9]+")
# Signed 64-bit, the widest integer key MySQL and SQLite store
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


def get_repository(db: AsyncSession = Depends(get_db)) -> EmployeeRepository:
    return EmployeeRepository(db)


def _parse_id(raw_id: str) -> Optional[int]:
    # Anything that is not a plain integer key can never match a row
    if not _ID_RE.fullmatch(raw_id):
        return None
    value = int(raw_id)
    if not _ID_MIN <= value <= _ID_MAX:
        return None
    return value


def _not_found(message: str = USER_NOT_FOUND) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status.HTTP_404_NOT_FOUND)


@router.get("", response_model=List[EmployeeResponse])
@rate_limit
async def list_employees(
    request: Request, repo: EmployeeRepository = Depends(get_repository)
):
    """Every employee row, in storage order."""
    return await repo.list_all()


@router.post("/create", response_class=PlainTextResponse, status_code=201)
@rate_limit
async def create_employee(
    request: Request,
    payload: Any = Body(default=None),
    repo: EmployeeRepository = Depends(get_repository),
):
    data = validate_employee(payload)
    employee_id = await repo.create(data)
    logger.info("Employee created", extra={"employee_id": employee_id})
    return PlainTextResponse(
        f"User added with ID: {employee_id}", status_code=status.HTTP_201_CREATED
    )


@router.put("/users/{employee_id}", response_class=PlainTextResponse)
@rate_limit
async def update_employee(
    request: Request,
    employee_id: str,
    payload: Any = Body(default=None),
    repo: EmployeeRepository = Depends(get_repository),
):
    """Full replacement of the five employee fields; partial bodies fail validation."""
    data = validate_employee(payload)

    parsed_id = _parse_id(employee_id)
    if parsed_id is None:
        return _not_found()

    if await repo.update(parsed_id, data) == 0:
        return _not_found()

    logger.info("Employee updated", extra={"employee_id": parsed_id})
    return PlainTextResponse("User Updated Successfully!")


@router.delete("/delete/{employee_id}", response_class=PlainTextResponse)
@rate_limit
async def delete_employee(
    request: Request,
    employee_id: str,
    repo: EmployeeRepository = Depends(get_repository),
):
    parsed_id = _parse_id(employee_id)
    if parsed_id is None:
        return _not_found()

    if await repo.delete(parsed_id) == 0:
        return _not_found()

    logger.info("Employee deleted", extra={"employee_id": parsed_id})
    return PlainTextResponse("User data Deleted Successfully!")


@router.get("/search/{letter}", response_model=List[EmployeeResponse])
@rate_limit
async def search_employees(
    request: Request,
    letter: str,
    repo: EmployeeRepository = Depends(get_repository),
):
    """Employees whose first name starts with ``letter``."""
    matches = await repo.search_by_first_name(letter)
    if not matches:
        return _not_found("No Employee Found!")
    return matches
