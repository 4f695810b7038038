"""Error taxonomy: kinds, messages and the kind → status table."""

import pytest

from noteshelf.exceptions import (
    STATUS_BY_KIND,
    DuplicateEntryError,
    EmptyValueError,
    ErrorKind,
    InvalidNumberStringError,
    InvalidTypeError,
    MaxValueError,
    MinValueError,
    NoteShelfError,
    NotFoundError,
    NotIntegerError,
    QueryError,
    UndefinedError,
    ValidationError,
    http_status_for,
)


def test_every_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


@pytest.mark.parametrize(
    "exc, status",
    [
        (UndefinedError("title"), 400),
        (InvalidTypeError("title", "string"), 400),
        (EmptyValueError("id"), 400),
        (MinValueError("title", 1), 400),
        (MaxValueError("title", 100), 400),
        (NotIntegerError("id"), 400),
        (InvalidNumberStringError("id"), 400),
        (NotFoundError(), 404),
        (DuplicateEntryError(), 409),
    ],
)
def test_http_status_follows_kind(exc, status):
    assert http_status_for(exc) == status


def test_hierarchy():
    assert issubclass(MinValueError, ValidationError)
    assert issubclass(ValidationError, NoteShelfError)
    assert issubclass(NotFoundError, QueryError)
    assert issubclass(DuplicateEntryError, QueryError)
    assert not issubclass(QueryError, ValidationError)


def test_query_error_messages_are_fixed():
    assert NotFoundError().message == "record was not found"
    assert DuplicateEntryError().message == "duplicate entry"
    assert str(NotFoundError()) == "record was not found"


def test_validation_context_names_the_field():
    exc = MaxValueError("title", 100)
    assert exc.field == "title"
    assert exc.context == {"field": "title", "max": 100}

    exc = MinValueError("name", 1)
    assert exc.context == {"field": "name", "min": 1}


def test_invalid_type_without_expected_types():
    exc = InvalidTypeError("id")
    assert exc.message == "Invalid type for Id"
    assert exc.expected_types == []
