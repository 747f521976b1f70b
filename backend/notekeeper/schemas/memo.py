"""
NoteKeeper Backend - Memo Request Schemas
==========================================

What:  Request bodies for creating and updating memos.
How:   Clients send only ``data``. The author is always the signed-in
       identity; an ``author`` key in the body is ignored.

Responses reuse the Memo model from notekeeper.models.memo directly.
Empty ``data`` passes schema validation and is rejected by MemoStore
with InvalidMemoError, so the error body explains the memo rule.
"""

from pydantic import BaseModel, Field


class MemoCreateRequest(BaseModel):
    """Body of PUT /note/."""
    data: str = Field(description="Memo text")


class MemoUpdateRequest(BaseModel):
    """Body of PATCH /note/{index}."""
    data: str = Field(description="Replacement memo text")
