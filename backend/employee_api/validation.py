"""
Declarative field rules for employee payloads.

Each field maps to an ordered list of ``(predicate, message)`` pairs. Every
rule of every field is evaluated, so a single response reports all of the
problems with a payload instead of the first one found. Create and update
share ``EMPLOYEE_RULES``.

Predicates receive the value in its JSON text form (see ``_as_text``):
missing or null values become ``""``, numbers become their decimal string and
booleans become ``"true"``/``"false"``, so ``{"fname": 123}`` fails the
letters-only rule. Lists and objects have no text form and fail every rule of
their field.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from employee_api.core.errors import EmployeeValidationError
from employee_api.schemas.employee import EmployeeIn, ValidationIssue

Predicate = Callable[[str], bool]
Rule = Tuple[Predicate, str]

_ALPHA_RE = re.compile(r"^[A-Za-z]+$")
_INT_RE = re.compile(r"^[+-]?\d+$")

GENDERS = ("Male", "Female", "Other")
MIN_AGE = 18


def is_alpha(value: str) -> bool:
    return bool(_ALPHA_RE.match(value))


def is_not_empty(value: str) -> bool:
    return value != ""


def is_int(minimum: Optional[int] = None) -> Predicate:
    def check(value: str) -> bool:
        if not _INT_RE.match(value):
            return False
        return minimum is None or int(value) >= minimum

    return check


def is_in(choices: Sequence[str]) -> Predicate:
    def check(value: str) -> bool:
        return value in choices

    return check


EMPLOYEE_RULES: Dict[str, List[Rule]] = {
    "fname": [
        (is_alpha, "First name must contain only letters"),
        (is_not_empty, "First name is required"),
    ],
    "lname": [
        (is_alpha, "Last name must contain only letters"),
        (is_not_empty, "Last name is required"),
    ],
    "age": [
        (is_int(minimum=MIN_AGE), "Age must be a number and at least 18"),
    ],
    "gender": [
        (is_in(GENDERS), "Gender must be either Male, Female or Other"),
    ],
    "role": [
        (is_not_empty, "Role is required"),
    ],
}


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def collect_errors(
    payload: Dict[str, Any], rules: Dict[str, List[Rule]] = EMPLOYEE_RULES
) -> List[Dict[str, Any]]:
    """Run every rule against ``payload`` and return the failures in rule order."""
    errors = []
    for field, field_rules in rules.items():
        raw = payload.get(field)
        text = _as_text(raw)
        for predicate, message in field_rules:
            if text is None or not predicate(text):
                errors.append(
                    ValidationIssue(field=field, message=message, value=raw).model_dump()
                )
    return errors


def validate_employee(payload: Any) -> EmployeeIn:
    """
    Check a create/update body and return the typed field values.

    A missing body counts as an empty object. Anything that is not a JSON
    object is rejected as a whole.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise EmployeeValidationError(
            [
                ValidationIssue(
                    field="body", message="Request body must be a JSON object"
                ).model_dump()
            ]
        )

    errors = collect_errors(payload)
    if errors:
        raise EmployeeValidationError(errors)

    return EmployeeIn(
        fname=_as_text(payload["fname"]),
        lname=_as_text(payload["lname"]),
        age=int(_as_text(payload["age"])),
        gender=payload["gender"],
        role=_as_text(payload["role"]),
    )
