"""
Error taxonomy for the chat engine.

Every failure the core can report carries an ErrorKind. Routes never inspect
message strings: the kind alone decides the HTTP status (see STATUS_CODES).

Usage:
    from apps.chat.errors import NotFoundError, ForbiddenError

    if session is None:
        raise NotFoundError("Session not found", resource_id=session_id)
"""

import logging
from enum import Enum
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class ErrorKind(str, Enum):
    """Categories of failure surfaced by the chat engine."""

    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION = "VALIDATION"
    PERSISTENCE = "PERSISTENCE"
    # Absorbed by AIResponseClient, never reaches a caller
    EXTERNAL_DEGRADED = "EXTERNAL_DEGRADED"


STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.VALIDATION: 400,
    ErrorKind.PERSISTENCE: 500,
    ErrorKind.EXTERNAL_DEGRADED: 503,
}


class ChatError(Exception):
    """Base exception for all chat engine errors.

    Attributes:
        kind: The ErrorKind categorizing this error
        message: Short human-readable message, safe to show to the end user
        details: Optional internal detail, logged but never returned
        context: Additional debugging information
    """

    kind: ErrorKind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, details: Optional[str] = None, **context: Any):
        self.message = message
        self.details = details
        self.context = context if context else None
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_dict(self) -> dict:
        """Public response body. Internal details stay out of it."""
        return {"message": self.message}


class NotFoundError(ChatError):
    """Session or other resource is absent."""

    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(ChatError):
    """Requester's pseudonym differs from the resource owner."""

    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ChatError):
    """Operation disallowed by the current session state."""

    kind = ErrorKind.FORBIDDEN


class ValidationError(ChatError):
    """Missing or malformed required input."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, details: Optional[str] = None, parameter: Optional[str] = None, **context: Any):
        if parameter:
            context["parameter"] = parameter
        super().__init__(message, details, **context)


class PersistenceError(ChatError):
    """Store unreachable or erroring. Reported as an opaque server error."""

    kind = ErrorKind.PERSISTENCE

    def to_dict(self) -> dict:
        return {"message": "Server error"}


class ExternalServiceError(ChatError):
    """A single failed attempt against the external AI responder."""

    kind = ErrorKind.EXTERNAL_DEGRADED

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        **context: Any,
    ):
        if status_code:
            context["status_code"] = status_code
        if error_type:
            context["error_type"] = error_type
        super().__init__(message, details, **context)


def handle_persistence_errors(operation: str):
    """Decorator for store methods: SQLAlchemy failures become PersistenceError.

    The wrapped method must belong to an object exposing the AsyncSession as
    ``self.db``; the session is rolled back before the error is re-raised.
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(self, *args: Any, **kwargs: Any):
            try:
                return await func(self, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"[{operation}] store failure: {e}", exc_info=True)
                try:
                    await self.db.rollback()
                except SQLAlchemyError:
                    logger.warning(f"[{operation}] rollback failed")
                raise PersistenceError("Server error", details=str(e), operation=operation) from e

        return wrapper  # type: ignore

    return decorator
