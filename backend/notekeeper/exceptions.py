"""
NoteKeeper Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every failure the core can report.
How:   Each exception carries a human-readable message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       structured JSON error responses with the right HTTP status code.
Who:   Raised by the stores and the identity dependency; caught by global handlers.
When:  Synchronously, during request processing. None of them are retried or
       recovered internally, and none leave a partial write behind.

Exception Hierarchy:
    NoteKeeperError (base)
    ├── AlreadyExistsError    → 400 Bad Request (username taken)
    ├── AuthFailureError      → 400 Bad Request (unknown user or wrong password)
    ├── UnauthenticatedError  → 401 Unauthorized (missing/unknown session token)
    ├── InvalidIndexError     → 404 on GET, 422 on PATCH/DELETE
    └── InvalidMemoError      → 400 on PUT, 422 on PATCH
"""

from typing import Any, Dict, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned only where harmless)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AlreadyExistsError(NoteKeeperError):
    """Raised by sign-up when the username is already registered."""

    def __init__(
        self,
        username: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if username:
            ctx["username"] = username
        super().__init__(message="User already exists", context=ctx)
        self.username = username


class AuthFailureError(NoteKeeperError):
    """
    Raised by sign-in when the username is unknown or the password is wrong.

    The message is the same in both cases, so a caller cannot probe which
    usernames are registered.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid username or password", context=context)


class UnauthenticatedError(NoteKeeperError):
    """
    Raised when a request needs an identity and the session token is absent,
    unknown, or already ended.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidIndexError(NoteKeeperError):
    """
    Raised when a memo address falls outside ``0 <= index < length``.

    Attributes:
        index:  The requested position
        length: Size of the memo sequence at the time of the check
        action: Verb for the message ("retrieve", "update", "remove")
    """

    def __init__(
        self,
        index: int,
        length: int,
        action: str = "retrieve",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update({"index": index, "length": length})
        super().__init__(message=f"Invalid index: Unable to {action} memo.", context=ctx)
        self.index = index
        self.length = length
        self.action = action


class InvalidMemoError(NoteKeeperError):
    """Raised when a memo would end up with an empty or missing field."""

    def __init__(
        self,
        message: str = "Invalid memo: 'data' and 'author' fields are required.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
