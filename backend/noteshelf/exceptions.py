"""
NoteShelf Backend — Domain Error Taxonomy
===========================================

What:  The closed set of failures the core can report to a client.
Why:   Route handlers must pick an HTTP status from the *kind* of failure,
       never from its message and never from ad-hoc isinstance chains.
How:   Every exception carries an `ErrorKind`. `STATUS_BY_KIND` is total over
       the enum, and `http_status_for()` is the single lookup used by the
       application's exception handler.
Who:   Raised by validators (validation kinds) and services (query kinds);
       translated by the handler registered in main.py.

Exception Hierarchy:
    NoteShelfError (base)
    ├── ValidationError                  → 400 Bad Request
    │   ├── UndefinedError               (value absent)
    │   ├── InvalidTypeError             (wrong type)
    │   ├── EmptyValueError              (blank string)
    │   ├── MinValueError                (below minimum length / value)
    │   ├── MaxValueError                (above maximum length / value)
    │   ├── NotIntegerError              (fractional number)
    │   └── InvalidNumberStringError     (string is not a number)
    └── QueryError
        ├── NotFoundError                → 404 Not Found
        └── DuplicateEntryError          → 409 Conflict

Anything that is not a NoteShelfError is opaque to the core and becomes a
500 with a generic body.
"""

from enum import Enum
from typing import Any, Dict, Optional, Sequence, Union


class ErrorKind(str, Enum):
    """Discriminator carried by every taxonomy error."""

    UNDEFINED = "undefined"
    INVALID_TYPE = "invalid_type"
    EMPTY_VALUE = "empty_value"
    MIN_VALUE = "min_value"
    MAX_VALUE = "max_value"
    NOT_INTEGER = "not_integer"
    INVALID_NUMBER_STRING = "invalid_number_string"
    NOT_FOUND = "not_found"
    DUPLICATE_ENTRY = "duplicate_entry"


def _capitalize(field: str) -> str:
    return field[:1].upper() + field[1:]


class NoteShelfError(Exception):
    """
    Base exception for all NoteShelf taxonomy errors.

    Attributes:
        kind:     ErrorKind discriminator (class-level, overridden by subclasses)
        message:  User-facing description, safe to return in an API response
        context:  Structured details (field name, bounds) for the response body
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


# ══════════════════════════════════════════════════════════════════════════
# Validation errors: raised by noteshelf.validators only
# ══════════════════════════════════════════════════════════════════════════


class ValidationError(NoteShelfError):
    """
    Raised when client input fails a field-level rule.

    Every subclass names the offending field; the message is built from it
    so that `str(exc)` is ready to hand back to the client.
    """

    def __init__(
        self,
        field: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = {"field": field}
        ctx.update(context or {})
        super().__init__(message=message, context=ctx)
        self.field = field


class UndefinedError(ValidationError):
    kind = ErrorKind.UNDEFINED

    def __init__(self, field: str):
        super().__init__(field, f"{field} is undefined")


class InvalidTypeError(ValidationError):
    """
    Value is not of the expected type.

    `expected` is either a single type name or a sequence of acceptable ones:
        InvalidTypeError("title", "string")          → "Title must be of type string"
        InvalidTypeError("id", ["string", "number"]) → "Id must be one of types: string, number"
    """

    kind = ErrorKind.INVALID_TYPE

    def __init__(self, field: str, expected: Union[str, Sequence[str], None] = None):
        if isinstance(expected, str):
            message = f"{_capitalize(field)} must be of type {expected}"
            expected_types = [expected]
        elif expected:
            expected_types = list(expected)
            message = f"{_capitalize(field)} must be one of types: {', '.join(expected_types)}"
        else:
            expected_types = []
            message = f"Invalid type for {_capitalize(field)}"
        super().__init__(field, message, context={"expected_types": expected_types})
        self.expected_types = expected_types


class EmptyValueError(ValidationError):
    kind = ErrorKind.EMPTY_VALUE

    def __init__(self, field: str):
        super().__init__(field, f"{_capitalize(field)} must not be empty")


class MinValueError(ValidationError):
    """Below a minimum: string length for text fields, numeric value for ids."""

    kind = ErrorKind.MIN_VALUE

    def __init__(self, field: str, min_value: int):
        super().__init__(
            field,
            f"{_capitalize(field)} must not be less than {min_value}",
            context={"min": min_value},
        )
        self.min_value = min_value


class MaxValueError(ValidationError):
    """Above a maximum: string length for text fields."""

    kind = ErrorKind.MAX_VALUE

    def __init__(self, field: str, max_value: int):
        super().__init__(
            field,
            f"{_capitalize(field)} must not be greater than {max_value}",
            context={"max": max_value},
        )
        self.max_value = max_value


class NotIntegerError(ValidationError):
    kind = ErrorKind.NOT_INTEGER

    def __init__(self, field: str):
        super().__init__(field, f"{_capitalize(field)} must be an integer")


class InvalidNumberStringError(ValidationError):
    kind = ErrorKind.INVALID_NUMBER_STRING

    def __init__(self, field: str):
        super().__init__(field, f"Invalid number string for {field}")


# ══════════════════════════════════════════════════════════════════════════
# Query errors: raised by services after validation has passed
# ══════════════════════════════════════════════════════════════════════════


class QueryError(NoteShelfError):
    """A persistence-level outcome the client is allowed to see."""


class NotFoundError(QueryError):
    """
    The referenced record does not exist.

    The message is deliberately generic: it never echoes the id or the
    table name back to the caller.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="record was not found", context=context)


class DuplicateEntryError(QueryError):
    """
    The store rejected a write because of a uniqueness constraint.

    Raised by services when they recognise the store's unique-violation
    signal (see noteshelf.database.is_unique_violation).
    """

    kind = ErrorKind.DUPLICATE_ENTRY

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="duplicate entry", context=context)


# ══════════════════════════════════════════════════════════════════════════
# Kind → HTTP status
# ══════════════════════════════════════════════════════════════════════════

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.UNDEFINED: 400,
    ErrorKind.INVALID_TYPE: 400,
    ErrorKind.EMPTY_VALUE: 400,
    ErrorKind.MIN_VALUE: 400,
    ErrorKind.MAX_VALUE: 400,
    ErrorKind.NOT_INTEGER: 400,
    ErrorKind.INVALID_NUMBER_STRING: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_ENTRY: 409,
}


def http_status_for(exc: NoteShelfError) -> int:
    """Returns the HTTP status code for a taxonomy error, selected by its kind."""
    return STATUS_BY_KIND[exc.kind]
