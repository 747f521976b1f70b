"""
NoteKeeper Backend - Memo Route Handlers
=========================================

What:  CRUD over the shared memo sequence, addressed by position.
How:   Extract the index/body, force ``author`` to the signed-in user,
       delegate to MemoStore. Errors raised by the store are turned into
       responses by the global exception handlers in main.py.

Route Inventory:
    GET    /note/          list every memo (public)
    PUT    /note/          append a memo             → full list
    GET    /note/{index}   read one memo             → 404 on bad index
    PATCH  /note/{index}   replace a memo's text     → 422 on bad index/memo
    DELETE /note/{index}   remove a memo             → remaining list, 422 on bad index

Index semantics:
    Positions shift after a DELETE. /note/1 before and after deleting
    /note/0 are different memos.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path

from notekeeper.dependencies import get_memo_store
from notekeeper.middleware.identity import require_identity
from notekeeper.models.memo import Memo, MemoPatch
from notekeeper.models.user import Identity
from notekeeper.schemas.common import ErrorResponse
from notekeeper.schemas.memo import MemoCreateRequest, MemoUpdateRequest
from notekeeper.services import MemoStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/note", tags=["Note"])

UNAUTHORIZED = {401: {"description": "Unauthorized", "model": ErrorResponse}}


@router.get(
    "/",
    response_model=List[Memo],
    summary="Get all memos",
)
@router.get("", response_model=List[Memo], include_in_schema=False)
async def list_memos(memos: MemoStore = Depends(get_memo_store)) -> List[Memo]:
    return list(memos.list_memos())


@router.put(
    "/",
    response_model=List[Memo],
    responses={
        200: {"description": "Memo created; full memo list returned"},
        400: {"description": "Invalid memo", "model": ErrorResponse},
        **UNAUTHORIZED,
    },
    summary="Create new memo",
)
@router.put("", response_model=List[Memo], include_in_schema=False)
async def create_memo(
    body: MemoCreateRequest,
    identity: Identity = Depends(require_identity),
    memos: MemoStore = Depends(get_memo_store),
) -> List[Memo]:
    return list(memos.add(Memo(data=body.data, author=identity.username)))


@router.get(
    "/{index}",
    response_model=Memo,
    responses={
        200: {"description": "Memo found"},
        404: {"description": "Memo not found", "model": ErrorResponse},
        **UNAUTHORIZED,
    },
    summary="Get memo by index",
)
async def get_memo(
    index: int = Path(description="0-based position in the memo list"),
    identity: Identity = Depends(require_identity),
    memos: MemoStore = Depends(get_memo_store),
) -> Memo:
    return memos.get(index)


@router.patch(
    "/{index}",
    response_model=Memo,
    responses={
        200: {"description": "Memo updated successfully"},
        422: {"description": "Invalid index or memo", "model": ErrorResponse},
        **UNAUTHORIZED,
    },
    summary="Update memo by index",
)
async def update_memo(
    body: MemoUpdateRequest,
    index: int = Path(description="0-based position in the memo list"),
    identity: Identity = Depends(require_identity),
    memos: MemoStore = Depends(get_memo_store),
) -> Memo:
    # The editor becomes the author
    return memos.update(index, MemoPatch(data=body.data, author=identity.username))


@router.delete(
    "/{index}",
    response_model=List[Memo],
    responses={
        200: {"description": "Memo deleted; remaining memos returned"},
        422: {"description": "Invalid index", "model": ErrorResponse},
        **UNAUTHORIZED,
    },
    summary="Delete memo by index",
)
async def delete_memo(
    index: int = Path(description="0-based position in the memo list"),
    identity: Identity = Depends(require_identity),
    memos: MemoStore = Depends(get_memo_store),
) -> List[Memo]:
    remaining = memos.remove(index)
    logger.debug("%s deleted memo %d; %d left", identity.username, index, len(remaining))
    return list(remaining)
