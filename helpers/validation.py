"""
Pure field checks applied before any store interaction.

Nothing in this module touches the database; board references are resolved
through a caller-supplied lookup.
"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Callable, Optional, Type, TypeVar
from helpers.errors import (
    BoardNotFoundError, InvalidEnumError, InvalidFieldError, MissingFieldError
)

E = TypeVar("E", bound=Enum)
R = TypeVar("R")


def validate_required_string(value: Any, field: str) -> str:
    """Fail when the value is absent, not a string, or blank."""
    if value is None or not isinstance(value, str) or value.strip() == "":
        raise MissingFieldError(field)
    return value


def validate_optional_string(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidFieldError(field, f"{field} must be a string")
    return value


def validate_enum(value: Any, enum_cls: Type[E], field: str) -> Optional[E]:
    """Translate a wire value into `enum_cls`; `None` means the field was not given."""
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    allowed = [member.value for member in enum_cls]
    if not isinstance(value, str) or value not in allowed:
        raise InvalidEnumError(field, value, allowed)
    return enum_cls(value)


def validate_board_reference(board_id: str, lookup: Callable[[str], Optional[R]]) -> R:
    board = lookup(board_id)
    if board is None:
        raise BoardNotFoundError(board_id)
    return board


def coerce_due_date(value: Any, field: str = "due_date") -> Optional[datetime]:
    """
    Coerce a due date into a datetime.

    `None` and the empty string clear the date. Plain dates become midnight UTC,
    ISO-8601 strings are parsed (a trailing `Z` is accepted).
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise InvalidFieldError(field, f"{field} must be an ISO-8601 date")
    raise InvalidFieldError(field, f"{field} must be an ISO-8601 date")


def validate_position(value: Any, field: str = "position") -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldError(field, f"{field} must be an integer")
    return value
