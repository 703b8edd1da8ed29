"""
TechNotes Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for the failure modes of the
       Notes and Users handlers.
Why:   Services raise typed failures; global handlers in main.py translate them
       into structured JSON responses with the right status code. Services never
       build HTTP responses themselves.
How:   Each exception class carries a human-readable message and an optional
       context dict (returned as `details` for client-fixable errors, logged
       only for server-side ones).

Exception Hierarchy:
    TechNotesError (base)
    ├── ValidationError     → 400 Bad Request (missing or malformed input)
    ├── NotFoundError       → 400 Bad Request (referenced record absent)
    ├── EmptyResultError    → 400 Bad Request (list query returned nothing)
    ├── PersistenceError    → 400 Bad Request (store rejected a write)
    ├── ConflictError       → 409 Conflict    (uniqueness violation)
    └── DatabaseError       → 500 Internal Server Error

Why NotFoundError is 400 (not 404):
    Every notes endpoint and most users endpoints report a missing record as a
    bad request, and clients already branch on that. One status code for one
    condition keeps the contract predictable.
"""

from typing import Any, Dict, Optional


class TechNotesError(Exception):
    """
    Base exception for all TechNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TechNotesError):
    """
    Raised when client input fails presence or type checks.

    Example response:
        {
            "error": "validation_error",
            "message": "All fields are required",
            "details": {"field": "completed"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(TechNotesError):
    """
    Raised when the record an operation targets does not exist.

    The message is supplied by the caller ("Note does not exist",
    "User not found") so each resource keeps its own wording.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class EmptyResultError(TechNotesError):
    """Raised when a list query succeeds but yields no records."""

    def __init__(
        self,
        message: str = "No records found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(TechNotesError):
    """
    Raised when a write would break a uniqueness invariant.

    When:    Duplicate note title or duplicate username, detected either by
             the service's pre-check or by the store's unique index when two
             requests race past the pre-check.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class PersistenceError(TechNotesError):
    """
    Raised when the store refuses a write for a reason other than uniqueness.

    HTTP:    400 Bad Request ("Invalid note data", "Invalid user data")
    """

    def __init__(
        self,
        message: str = "Invalid data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(TechNotesError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
