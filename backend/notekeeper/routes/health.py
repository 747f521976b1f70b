"""
NoteKeeper Backend - Health Check Route
========================================

What:  Liveness endpoint for container health checks and load balancers.
How:   Reports the app's uptime and the size of each in-memory store.
       There are no external dependencies to probe, so a process that can
       answer is healthy.
"""

import logging
import time

from fastapi import APIRouter, Depends, Request

from notekeeper import __version__
from notekeeper.dependencies import get_credential_store, get_memo_store, get_session_manager
from notekeeper.schemas.common import HealthResponse
from notekeeper.services import CredentialStore, MemoStore, SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    request: Request,
    memos: MemoStore = Depends(get_memo_store),
    credentials: CredentialStore = Depends(get_credential_store),
    sessions: SessionManager = Depends(get_session_manager),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        memos=memos.count(),
        users=credentials.count(),
        active_sessions=sessions.active_count(),
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
