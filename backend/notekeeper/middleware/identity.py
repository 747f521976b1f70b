"""
NoteKeeper Backend - Identity Resolution
=========================================

What:  Resolves the caller's identity from the session cookie.
How:   A FastAPI dependency: read the cookie, ask the SessionManager, and
       either short-circuit with UnauthenticatedError (→ 401) or record the
       username on ``request.state`` for the rest of the request.
Who:   Declared by every route that needs an identity.
When:  Before the route body runs, so an unauthenticated request never
       reaches the MemoStore.

Scope:
    Applied per route, not app-wide: GET /note/ and the health check are
    public. Protected routes show the cookie security scheme in the docs.

State:
    None of its own. The session map belongs to SessionManager.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from notekeeper.config import settings
from notekeeper.dependencies import get_session_manager
from notekeeper.models.user import Identity
from notekeeper.services import SessionManager

logger = logging.getLogger(__name__)

# Declares the cookie for OpenAPI; auto_error=False so a missing cookie is
# reported by SessionManager with the same 401 body as an unknown one.
session_cookie = APIKeyCookie(
    name=settings.session_cookie_name,
    scheme_name="cookieAuth",
    description="Session token issued by POST /user/sign-in",
    auto_error=False,
)


async def get_session_token(token: Optional[str] = Depends(session_cookie)) -> Optional[str]:
    """The raw session token from the request cookie, if any."""
    return token


async def require_identity(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionManager = Depends(get_session_manager),
) -> Identity:
    """
    Resolve the signed-in identity or fail the request with 401.

    Side effect:
        ``request.state.username`` is set, which the access log picks up.

    Raises:
        UnauthenticatedError: no cookie, or the token is not a live session.
    """
    identity = sessions.resolve(token)
    request.state.username = identity.username
    logger.debug("Request authenticated as %s", identity.username)
    return identity
