"""
NoteKeeper Backend - Store Dependencies
========================================

What:  FastAPI dependencies handing the application's stores to route handlers.
How:   create_app() builds one CredentialStore, SessionManager and MemoStore and
       parks them on ``app.state``; these functions fetch them from the request.
Who:   Injected into route handlers via ``Depends()``.
When:  Resolved per request; the stores themselves are built once per app.

Example usage in a route:
    @router.get("/")
    async def list_memos(memos: MemoStore = Depends(get_memo_store)):
        return memos.list_memos()

Tests override nothing: each test builds its own app through create_app(),
so every test starts from a fresh seed memo and no users.
"""

from fastapi import Request

from notekeeper.services import CredentialStore, MemoStore, SessionManager


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_memo_store(request: Request) -> MemoStore:
    return request.app.state.memo_store
