"""
NoteShelf Backend — Input Validators
======================================

What:  Pure, synchronous checks applied to already-extracted request fields.
Why:   Every value is checked before it reaches SQL, and each failure is a
       distinct ValidationError kind so the caller can branch on it.
How:   Checks run in a fixed order and stop at the first violated rule.
       Validators never aggregate errors and never see the request object.
Who:   Called by the entity services at the start of every operation.
"""

import math
import re
from typing import Any, List, Optional, Set

from noteshelf.exceptions import (
    EmptyValueError,
    InvalidNumberStringError,
    InvalidTypeError,
    MaxValueError,
    MinValueError,
    NotIntegerError,
    UndefinedError,
)

# Ids are strictly positive and stored in 32-bit Integer columns
MIN_ID = 1
MAX_ID = 2**31 - 1


def validate_string(
    field: str,
    value: Any,
    max_length: Optional[int] = None,
    min_length: Optional[int] = None,
) -> str:
    """
    Validate a text field.

    Order: undefined → type → max length → min length.

    Args:
        field: Field name used in the error message
        value: Raw value; None means the field was absent
        max_length: Inclusive upper bound on len(value), skipped when None
        min_length: Inclusive lower bound on len(value), skipped when None

    Returns:
        The value, unchanged.

    Raises:
        UndefinedError, InvalidTypeError, MaxValueError, MinValueError

    Example:
        validate_string("title", "My note", 100, 1)   # ok
        validate_string("title", "My note", 10, 8)    # MinValueError: Title must not be less than 8
    """
    if value is None:
        raise UndefinedError(field)
    if not isinstance(value, str):
        raise InvalidTypeError(field, "string")
    if max_length is not None and len(value) > max_length:
        raise MaxValueError(field, max_length)
    if min_length is not None and len(value) < min_length:
        raise MinValueError(field, min_length)
    return value


# Number strings in the id grammar: ASCII decimal with optional exponent,
# signed Infinity, or an unsigned 0x / 0o / 0b literal
_DECIMAL_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_INFINITY_RE = re.compile(r"[+-]?Infinity")
_RADIX_RE = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def validate_id(value: Any, field: str = "id") -> int:
    """
    Validate a record id given as a whole number or a numeric string.

    String input: blank → EmptyValueError, not a number → InvalidNumberStringError,
    fractional → NotIntegerError, below 1 → MinValueError.
    Numeric input: fractional → NotIntegerError, below 1 → MinValueError.

    Only ASCII number strings count: "1_000" and "١٢" are not numbers here
    even though float() would take them.

    There is no upper bound. An id past MAX_ID is valid input that simply
    matches no row; see is_storable_id.

    Returns:
        The id as an int.
    """
    if value is None:
        raise UndefinedError(field)
    # bool is an int subclass; True must not pass as id 1
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidTypeError(field, ["string", "number"])

    if isinstance(value, str):
        text = value.strip()
        if text == "":
            raise EmptyValueError(field)
        if _RADIX_RE.fullmatch(text):
            number = int(text, 0)
            if number < MIN_ID:
                raise MinValueError(field, MIN_ID)
            return number
        if not (_DECIMAL_RE.fullmatch(text) or _INFINITY_RE.fullmatch(text)):
            raise InvalidNumberStringError(field)
        number = float(text.replace("Infinity", "inf"))
        _check_whole_and_positive(field, number)
        try:
            return int(text)
        except ValueError:
            # "1e3", "7.0" and friends
            return int(number)

    if isinstance(value, float):
        _check_whole_and_positive(field, value)
        return int(value)

    if value < MIN_ID:
        raise MinValueError(field, MIN_ID)
    return value


def _check_whole_and_positive(field: str, number: float) -> None:
    if not math.isfinite(number) or not number.is_integer():
        raise NotIntegerError(field)
    if number < MIN_ID:
        raise MinValueError(field, MIN_ID)


def is_storable_id(record_id: int) -> bool:
    """
    True when a validated id fits the Integer key columns.

    Larger ids cannot name an existing row, and binding them would make the
    driver raise (OverflowError on SQLite, DataError on Postgres), so the
    services answer "not found" without querying.
    """
    return record_id <= MAX_ID


def validate_id_list(values: Any, field: str = "ids") -> List[int]:
    """
    Validate a batch of ids (used by batch delete).

    The container must be a non-empty list; each element follows validate_id,
    and the first bad element stops validation. Duplicates are dropped,
    first occurrence wins.
    """
    if values is None:
        raise UndefinedError(field)
    if not isinstance(values, (list, tuple)):
        raise InvalidTypeError(field, "array")
    if len(values) == 0:
        raise EmptyValueError(field)

    ids: List[int] = []
    seen: Set[int] = set()
    for value in values:
        validated = validate_id(value)
        if validated not in seen:
            seen.add(validated)
            ids.append(validated)
    return ids
