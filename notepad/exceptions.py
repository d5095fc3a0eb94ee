"""
Note Pad API: Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by NoteService; caught by the handlers in main.py.

Exception Hierarchy:
    NotePadError (base)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

No retries happen anywhere: every failure is surfaced to the caller as soon
as it occurs.
"""

from typing import Any, Dict, Optional


class NotePadError(Exception):
    """
    Base exception for all Note Pad application errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (logged server-side)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(NotePadError):
    """
    Raised when a lookup, update or delete by id matches zero rows.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotePadError):
    """
    Raised when a statement fails at the backend (connectivity, query error).

    HTTP: 500 Internal Server Error. The message carries the backend's error
    text so the caller can see what the datastore reported.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

    @classmethod
    def from_exception(cls, exc: Exception, **context: Any) -> "DatabaseError":
        """Wrap a driver/SQLAlchemy exception, keeping the backend's own text."""
        original = getattr(exc, "orig", None) or exc
        context.setdefault("error_type", type(exc).__name__)
        return cls(message=f"Database error: {original}", context=context)
