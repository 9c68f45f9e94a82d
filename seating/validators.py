"""
validators.py

Stateless checks for the fields a new table is created with. Each raw value
is first classified as missing, invalid or valid; only then is an error
raised, so an empty string or a zero is never mistaken for "absent" by
accident.
"""

import enum

from .exceptions import InvalidRequest


# Column limits of Table.table_name (CharField) and Table.capacity (PositiveIntegerField).
MAX_TABLE_NAME_LENGTH = 50
MAX_CAPACITY = 2147483647


class FieldState(enum.Enum):
    MISSING = "missing"
    INVALID = "invalid"
    VALID = "valid"


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def classify_table_name(value) -> FieldState:
    if _is_missing(value):
        return FieldState.MISSING
    if not isinstance(value, str) or not 2 <= len(value) <= MAX_TABLE_NAME_LENGTH:
        return FieldState.INVALID
    return FieldState.VALID


def classify_capacity(value) -> FieldState:
    if _is_missing(value):
        return FieldState.MISSING
    # bool is an int subclass; True is not a capacity.
    if isinstance(value, bool):
        return FieldState.INVALID
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return FieldState.INVALID
    if isinstance(value, float) and value != number:
        return FieldState.INVALID
    return FieldState.VALID if 0 < number <= MAX_CAPACITY else FieldState.INVALID


def validate_name(table_name) -> str:
    """Return the table name unchanged, or raise ``InvalidRequest``."""
    state = classify_table_name(table_name)
    if state is FieldState.MISSING:
        raise InvalidRequest("data must include a table_name.")
    if state is FieldState.INVALID:
        raise InvalidRequest(f"{table_name} is not a valid table_name")
    return table_name


def validate_capacity_field(capacity) -> int:
    """Return the capacity as an ``int``, or raise ``InvalidRequest``."""
    state = classify_capacity(capacity)
    if state is FieldState.MISSING:
        raise InvalidRequest("data must include a capacity value")
    if state is FieldState.INVALID:
        raise InvalidRequest(f"{capacity} is not a valid capacity")
    return int(capacity)
