from pydantic import BaseModel, ConfigDict
from typing import Any, Literal


Gender = Literal["Male", "Female", "Other"]


class EmployeeIn(BaseModel):
    """Field values that already passed the employee rules."""

    fname: str
    lname: str
    age: int
    gender: Gender
    role: str


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    firstname: str
    lastname: str
    age: int
    gender: str
    role: str


class ValidationIssue(BaseModel):
    field: str
    message: str
    value: Any = None
