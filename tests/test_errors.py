# tests/test_errors.py
"""Unit tests for the error taxonomy and its serialized form."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from vehicle_registry.errors import (
    AppError,
    DuplicateError,
    IncorrectValueError,
    InternalError,
    NotFoundError,
    ReferenceNotFoundError,
    ValidationError,
    message_of,
)


@pytest.mark.parametrize("error_cls, kind, status_code", [
    (InternalError, "InternalError", 500),
    (DuplicateError, "DuplicateError", 409),
    (ValidationError, "ValidationError", 400),
    (NotFoundError, "NotFoundError", 404),
    (ReferenceNotFoundError, "ReferenceNotFoundError", 404),
    (IncorrectValueError, "IncorrectValueError", 422),
])
def test_kind_and_status(error_cls, kind, status_code):
    error = error_cls("boom")
    assert isinstance(error, AppError)
    assert error.kind == kind
    assert error.status_code == status_code


def test_error_without_detail_serializes_context_only():
    error = InternalError(message_of("Fail to create vehicle log", {"vehicle_number": "V1"}))
    assert error.to_dict() == {
        "error": {
            "type": "InternalError",
            "info": {"message": "Fail to create vehicle log", "target": {"vehicle_number": "V1"}},
        }
    }


def test_error_with_detail_serializes_context_and_detail():
    context = message_of("Fail to create vehicle log", {"vehicle_number": "XYZ999"})
    error = ReferenceNotFoundError(context, "A vehicle with this number was not found.")
    assert error.to_dict()["error"]["info"] == {
        "context": {"message": "Fail to create vehicle log", "target": {"vehicle_number": "XYZ999"}},
        "detail": "A vehicle with this number was not found.",
    }
    assert str(error) == "A vehicle with this number was not found."


def test_plain_message_context():
    error = NotFoundError("Vehicle Log ID not found: 7")
    assert error.to_dict() == {"error": {"type": "NotFoundError", "info": "Vehicle Log ID not found: 7"}}
    assert str(error) == "Vehicle Log ID not found: 7"
