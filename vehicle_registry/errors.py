# vehicle_registry/errors.py
"""
Typed application errors.

Every failure the services report to callers is one of a closed set of
kinds, each an AppError subclass carrying:
  - kind         machine-readable tag (e.g. "IncorrectValueError")
  - status_code  HTTP status the routers respond with
  - context      public message, plus the request target that failed
  - detail       optional human-readable explanation of a domain rule

Private causes (driver exceptions, SQL errors) are logged and never stored
on the error, so serializing one is always safe to send to a client.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ErrorContext:
    message: str
    target: Any = field(default=None)

    def as_dict(self) -> dict:
        return {"message": self.message, "target": self.target}


def message_of(message: str, target: Any = None) -> ErrorContext:
    return ErrorContext(message=message, target=target)


class AppError(Exception):
    kind = "AppError"
    status_code = 500

    def __init__(self, context, detail: Optional[str] = None):
        super().__init__(detail or _context_message(context))
        self.context = context
        self.detail = detail

    @property
    def info(self):
        context = self.context.as_dict() if isinstance(self.context, ErrorContext) else self.context
        if self.detail is None:
            return context
        return {"context": context, "detail": self.detail}

    def to_dict(self) -> dict:
        return {"error": {"type": self.kind, "info": self.info}}


class InternalError(AppError):
    kind = "InternalError"
    status_code = 500


class DuplicateError(AppError):
    kind = "DuplicateError"
    status_code = 409


class ValidationError(AppError):
    """Malformed request input. Context is a list of {path, message} items."""
    kind = "ValidationError"
    status_code = 400


class NotFoundError(AppError):
    kind = "NotFoundError"
    status_code = 404


class ReferenceNotFoundError(AppError):
    """A vehicle or driver referenced by another record does not exist."""
    kind = "ReferenceNotFoundError"
    status_code = 404


class IncorrectValueError(AppError):
    """A supplied value breaks a domain rule (mileage or entry/exit order)."""
    kind = "IncorrectValueError"
    status_code = 422


def _context_message(context) -> str:
    if isinstance(context, ErrorContext):
        return context.message
    return str(context)
