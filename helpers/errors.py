"""
Error taxonomy for board and task operations.

Every error carries a machine-readable `kind`, a human-readable `message` and
the HTTP status the API layer answers with.
"""

from typing import Any, Dict, Iterable, Optional


class LifecycleError(Exception):
    """Base class for errors raised by the task lifecycle."""
    kind = "lifecycle_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "kind": self.kind}


class MissingFieldError(LifecycleError):
    """A required field was absent or empty."""
    kind = "missing_field"
    status_code = 400

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"{field} is required")
        self.field = field


class MissingParameterError(LifecycleError):
    """A required query parameter was omitted."""
    kind = "missing_parameter"
    status_code = 400

    def __init__(self, parameter: str):
        super().__init__(f"{parameter} query parameter is required")
        self.parameter = parameter


class InvalidEnumError(LifecycleError):
    """A value was not a member of its closed enumeration."""
    kind = "invalid_enum"
    status_code = 400

    def __init__(self, field: str, value: Any, allowed: Iterable[str]):
        self.allowed = list(allowed)
        super().__init__(f"Invalid {field}. Must be one of: {', '.join(self.allowed)}")
        self.field = field
        self.value = value


class InvalidFieldError(LifecycleError):
    """A value had the wrong type or format, or the field cannot be written."""
    kind = "invalid_field"
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class NotFoundError(LifecycleError):
    """The referenced entity does not exist."""
    kind = "not_found"
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity.capitalize()} not found")
        self.entity = entity
        self.entity_id = entity_id


class BoardNotFoundError(NotFoundError):
    """A task referenced a board that does not exist."""
    kind = "board_not_found"

    def __init__(self, board_id: str):
        super().__init__("board", board_id)


class StoreUnavailableError(LifecycleError):
    """The record store failed for reasons outside validation."""
    kind = "store_unavailable"
    status_code = 503
