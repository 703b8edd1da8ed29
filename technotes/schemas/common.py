"""
TechNotes Backend — Shared Response Schemas
=============================================

What:  Response models used by more than one resource: plain messages,
       the error envelope, and the health document.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """
    What:  A single human-readable outcome message.
    Who:   Returned by create, update (users) and delete endpoints.

    Example:
        {"message": "User jdoe created"}
    """
    message: str = Field(description="Human-readable outcome message")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.
    Why:   Clients need a consistent structure to parse errors programmatically.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "conflict")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "conflict",
            "message": "Note title already exists",
            "details": {"field": "title"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
