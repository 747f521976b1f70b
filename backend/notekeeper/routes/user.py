"""
NoteKeeper Backend - User Route Handlers
=========================================

What:  Registration, sign-in, sign-out and profile.
How:   Thin handlers: password work goes to CredentialStore (in the
       threadpool, since PBKDF2 is CPU-bound), sessions to SessionManager.
       The session token travels only in an HttpOnly cookie.

Route Inventory:
    PUT  /user/sign-up   register            → 200 | 400 already exists
    POST /user/sign-in   start a session     → 200 + Set-Cookie | 400 bad credentials
    GET  /user/sign-out  end the session     → 200, cookie cleared | 401
    GET  /user/profile   who am I            → 200 | 401
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from notekeeper.config import settings
from notekeeper.dependencies import get_credential_store, get_session_manager
from notekeeper.middleware.identity import get_session_token, require_identity
from notekeeper.models.user import Identity
from notekeeper.schemas.common import ErrorResponse
from notekeeper.schemas.user import ApiResponse, ProfileResponse, SignInRequest
from notekeeper.services import CredentialStore, SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["User"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    """Tell the browser to drop the session cookie."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


@router.put(
    "/sign-up",
    response_model=ApiResponse,
    responses={
        200: {"description": "User created successfully"},
        400: {"description": "User already exists", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def sign_up(
    body: SignInRequest,
    credentials: CredentialStore = Depends(get_credential_store),
) -> ApiResponse:
    await run_in_threadpool(credentials.register, body.username, body.password)
    return ApiResponse(success=True, message="User created")


@router.post(
    "/sign-in",
    response_model=ApiResponse,
    responses={
        200: {"description": "Authentication successful; session cookie set"},
        400: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Authenticate user and create session",
)
async def sign_in(
    body: SignInRequest,
    response: Response,
    credentials: CredentialStore = Depends(get_credential_store),
    sessions: SessionManager = Depends(get_session_manager),
) -> ApiResponse:
    """
    Verify the password and start a session.

    Signing in again while already signed in starts a second, independent
    session; the earlier token stays valid until it is signed out.
    """
    identity = await run_in_threadpool(credentials.verify, body.username, body.password)
    token = sessions.create_session(identity)
    _set_session_cookie(response, token)
    return ApiResponse(success=True, message=f"Signed in as {identity.username}")


@router.get(
    "/sign-out",
    response_model=ApiResponse,
    responses={
        200: {"description": "Successfully signed out"},
        401: {"description": "No live session", "model": ErrorResponse},
    },
    summary="End user session",
)
async def sign_out(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionManager = Depends(get_session_manager),
) -> ApiResponse:
    sessions.end_session(token)
    clear_session_cookie(response)
    return ApiResponse(success=True, message="Signed out")


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={
        200: {"description": "Profile retrieved successfully"},
        401: {"description": "Unauthorized", "model": ErrorResponse},
    },
    summary="Get current user profile",
)
async def profile(identity: Identity = Depends(require_identity)) -> ProfileResponse:
    return ProfileResponse(success=True, username=identity.username)
