"""
NoteKeeper Backend - Session Manager
=====================================

What:  Issues, resolves and ends opaque session tokens.
How:   A dict of token → Session. Tokens come from secrets.token_urlsafe and
       are re-drawn on the (practically impossible) collision with a live one.
Who:   sign-in creates sessions, the identity dependency resolves them,
       sign-out ends them.
When:  Built once in create_app(); all sessions vanish on restart.

Lifecycle:
    sign-in ──create_session──▶ live ──end_session──▶ gone
                                 │
                                 └── resolve() on every authenticated request

    There is no expiry: a session lives until sign-out or process exit.
"""

import logging
import secrets
import threading
from typing import Dict, Optional

from notekeeper.exceptions import UnauthenticatedError
from notekeeper.models.user import Identity, Session

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


class SessionManager:
    """In-memory session registry. Tokens are never logged."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(self, identity: Identity) -> str:
        """Bind a fresh token to ``identity`` and return it."""
        with self._lock:
            token = secrets.token_urlsafe(TOKEN_BYTES)
            while token in self._sessions:
                token = secrets.token_urlsafe(TOKEN_BYTES)
            self._sessions[token] = Session(token=token, username=identity.username)
        logger.info("Session started for %s", identity.username)
        return token

    def resolve(self, token: Optional[str]) -> Identity:
        """
        Look up the identity behind ``token``.

        Raises:
            UnauthenticatedError: token is missing, unknown or already ended.
        """
        if not token:
            raise UnauthenticatedError()
        with self._lock:
            session = self._sessions.get(token)
        if session is None:
            raise UnauthenticatedError()
        return Identity(username=session.username)

    def end_session(self, token: Optional[str]) -> None:
        """
        Invalidate ``token``; later resolve() calls for it fail.

        Raises:
            UnauthenticatedError: token is missing, unknown or already ended.
        """
        if not token:
            raise UnauthenticatedError()
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is None:
            raise UnauthenticatedError()
        logger.info("Session ended for %s", session.username)

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)
