"""
Service error taxonomy.

Every failure a service can report maps to exactly one HTTP status. The API
layer renders these into the response envelope; services never build HTTP
responses themselves.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, error: str | None = None, warning: str | None = None):
        super().__init__(message)
        self.message = message
        self.error = error
        self.warning = warning


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = 400


class Unauthorized(ServiceError):
    """Bad credentials."""

    status_code = 401


class Forbidden(ServiceError):
    """Caller's role does not allow the operation."""

    status_code = 403


class NotFound(ServiceError):
    """Referenced entity is absent."""

    status_code = 404


class Conflict(ServiceError):
    """Duplicate email or duplicate application."""

    status_code = 409


class InternalError(ServiceError):
    """Store or storage failure."""

    status_code = 500


@contextmanager
def store_errors(message: str):
    """Translate database failures inside the block into InternalError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{message}: {e}")
        raise InternalError(message, error=str(e)) from e
