"""
NoteKeeper Backend - Shared Response Schemas
=============================================

What:  Error envelope and health check payload shared across routers.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Body of every error produced by the global exception handlers.

    Example:
        {
            "success": false,
            "error": "invalid_index",
            "message": "Invalid index: Unable to retrieve memo.",
            "details": {"index": 7, "length": 2},
            "request_id": "3f2a9c1d"
        }
    """
    success: bool = Field(default=False)
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Liveness payload with the sizes of the in-memory stores."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    memos: int = Field(description="Number of memos in the shared sequence")
    users: int = Field(description="Number of registered users")
    active_sessions: int = Field(description="Number of live sessions")
    uptime_seconds: float = Field(description="Seconds since service started")
