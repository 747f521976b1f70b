"""
NoteKeeper Backend - Memo Store
================================

What:  The single shared, ordered sequence of memos and every operation on it.
How:   A plain list guarded by one lock. Memos are addressed by their 0-based
       position; callers only ever receive frozen Memo objects or tuple
       snapshots, never the backing list.
Who:   Owned by the application (app.state.memo_store), reached from the
       memo routes through a FastAPI dependency.
When:  Built once in create_app(); lives until the process exits.

Addressing:
    ┌────────────┬────────────┬────────────┐
    │ 0 Moonhalo │ 1 hello    │ 2 world    │      remove(0)
    └────────────┴────────────┴────────────┘          │
    ┌────────────┬────────────┐                       ▼
    │ 0 hello    │ 1 world    │   every later memo shifts down by one
    └────────────┴────────────┘

    Addresses are NOT stable identifiers. Clients that delete by index must
    re-read the list before acting on another index.

Validity rules shared by all operations:
    - index:  0 <= index < length (an empty store has no valid index)
    - memo:   data and author are non-empty after any update is applied
"""

import logging
import threading
from typing import Iterable, List, Optional

from notekeeper.exceptions import InvalidIndexError, InvalidMemoError
from notekeeper.models.memo import Memo, MemoPatch, MemoSnapshot

logger = logging.getLogger(__name__)

SEED_MEMOS: MemoSnapshot = (Memo(data="Moonhalo", author="saltyaom"),)


class MemoStore:
    """
    Ordered, shared memo collection with positional addressing.

    There is no per-author partition and no ownership check: any caller may
    read, update or remove any memo by index.

    Thread Safety:
        Each read-modify-write (check length, then mutate) runs under one
        lock per store instance, so concurrent callers observe the same
        sequential behaviour a single event loop would give them.
    """

    def __init__(self, initial: Optional[Iterable[Memo]] = None):
        self._memos: List[Memo] = list(SEED_MEMOS if initial is None else initial)
        self._lock = threading.Lock()

    # ── Validation ────────────────────────────────────────────────────────

    def _check_index(self, index: int, action: str) -> None:
        length = len(self._memos)
        if not 0 <= index < length:
            raise InvalidIndexError(index=index, length=length, action=action)

    @staticmethod
    def _check_memo(memo: Memo) -> None:
        if not memo.data:
            raise InvalidMemoError(field="data")
        if not memo.author:
            raise InvalidMemoError(field="author")

    # ── Operations ────────────────────────────────────────────────────────

    def add(self, memo: Memo) -> MemoSnapshot:
        """
        Append a memo to the end of the sequence.

        Returns:
            Snapshot of the whole sequence, including the new memo.

        Raises:
            InvalidMemoError: data or author is empty.
        """
        self._check_memo(memo)
        with self._lock:
            self._memos.append(memo)
            logger.info("Memo added at index %d by %s", len(self._memos) - 1, memo.author)
            return tuple(self._memos)

    def get(self, index: int) -> Memo:
        """
        Return the memo at ``index``.

        Raises:
            InvalidIndexError: index outside [0, length).
        """
        with self._lock:
            self._check_index(index, "retrieve")
            return self._memos[index]

    def update(self, index: int, patch: MemoPatch) -> Memo:
        """
        Merge the supplied fields of ``patch`` into the memo at ``index``.

        Unsupplied fields keep their current value. The merged memo must
        still satisfy the memo rule, otherwise nothing is written.

        Returns:
            The memo as stored after the update.

        Raises:
            InvalidIndexError: index outside [0, length).
            InvalidMemoError:  patch supplies no field, or leaves a field empty.
        """
        changes = patch.supplied_fields()
        with self._lock:
            self._check_index(index, "update")
            if not changes:
                raise InvalidMemoError(
                    message="Invalid memo: At least one field ('data' or 'author') is required to update."
                )
            updated = self._memos[index].model_copy(update=changes)
            self._check_memo(updated)
            self._memos[index] = updated
            logger.info("Memo %d updated (fields: %s)", index, ", ".join(sorted(changes)))
            return updated

    def remove(self, index: int) -> MemoSnapshot:
        """
        Remove the memo at ``index``; later memos move down one position.

        Returns:
            Snapshot of the remaining sequence.

        Raises:
            InvalidIndexError: index outside [0, length).
        """
        with self._lock:
            self._check_index(index, "remove")
            removed = self._memos.pop(index)
            logger.info("Memo %d removed (author %s)", index, removed.author)
            return tuple(self._memos)

    def list_memos(self) -> MemoSnapshot:
        """Snapshot of every memo, in order. Never fails."""
        with self._lock:
            return tuple(self._memos)

    def clear(self) -> MemoSnapshot:
        """Drop every memo. Not routed; used by tests and maintenance code."""
        with self._lock:
            self._memos.clear()
            logger.debug("Memo store cleared")
            return ()

    def count(self) -> int:
        with self._lock:
            return len(self._memos)

    def __len__(self) -> int:
        return self.count()
