from typing import Any, Dict, List


class EmployeeValidationError(Exception):
    """Raised when a payload breaks one or more field rules."""

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class StorageError(Exception):
    """A database call failed; the cause is logged, never sent to the client."""

    def __init__(self, action: str):
        super().__init__(f"Storage error while {action}")
        self.action = action
