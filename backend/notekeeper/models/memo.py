"""
NoteKeeper Backend - Memo Value Objects
========================================

What:  The memo entity and the partial update applied to it.
How:   Frozen pydantic models, so a memo handed out by the store can never be
       changed behind the store's back. Updates build a new Memo.
Who:   Created by route handlers, owned by MemoStore, serialized by FastAPI.

Field rules (the models accept empty strings; MemoStore rejects them):
    - data:   the memo text
    - author: username of the identity that last wrote the memo
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field


class Memo(BaseModel):
    """A piece of text attributed to an author."""

    data: str = Field(description="Memo text")
    author: str = Field(description="Username of the memo's author")

    model_config = {"frozen": True}


class MemoPatch(BaseModel):
    """
    Partial update for a memo. ``None`` means "leave this field unchanged".
    """

    data: Optional[str] = Field(default=None, description="Replacement memo text")
    author: Optional[str] = Field(default=None, description="Replacement author")

    model_config = {"frozen": True}

    def supplied_fields(self) -> dict:
        """Fields the caller actually provided."""
        return self.model_dump(exclude_none=True)


# Immutable copy of the store's sequence
MemoSnapshot = Tuple[Memo, ...]
