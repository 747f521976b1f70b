"""
NoteKeeper Backend - Memo Store Unit Tests
===========================================

What:  Tests for MemoStore positional CRUD semantics.
How:   Plain store instances, no HTTP.

What we test:
    ✅ Seed memo and snapshots (copies, not the live list)
    ✅ add/get/update/remove/clear happy paths
    ✅ Index rule 0 <= index < length, including the empty store
    ✅ Memo rule: non-empty data and author, also after an update
    ✅ Index shift after remove
"""

import pytest
from pydantic import ValidationError

from notekeeper.exceptions import InvalidIndexError, InvalidMemoError
from notekeeper.models.memo import Memo, MemoPatch
from notekeeper.services.memo_store import MemoStore


SEED = Memo(data="Moonhalo", author="saltyaom")


class TestMemoStoreSeed:
    """Initial state and snapshots."""

    def test_default_seed(self, memo_store):
        assert memo_store.list_memos() == (SEED,)
        assert len(memo_store) == 1

    def test_custom_initial_sequence(self):
        store = MemoStore(initial=[Memo(data="a", author="x"), Memo(data="b", author="y")])
        assert [m.data for m in store.list_memos()] == ["a", "b"]

    def test_list_is_a_snapshot(self, memo_store):
        """A previously returned list does not change when the store does."""
        before = memo_store.list_memos()
        memo_store.add(Memo(data="hello", author="alice"))
        assert len(before) == 1
        assert len(memo_store.list_memos()) == 2

    def test_initial_iterable_is_copied(self):
        initial = [Memo(data="a", author="x")]
        store = MemoStore(initial=initial)
        initial.append(Memo(data="b", author="y"))
        assert store.count() == 1

    def test_memos_are_immutable(self, memo_store):
        memo = memo_store.get(0)
        with pytest.raises(ValidationError):
            memo.data = "changed"
        assert memo_store.get(0) == SEED


class TestMemoStoreAdd:
    """Tests for add()."""

    def test_add_returns_full_snapshot(self, memo_store):
        result = memo_store.add(Memo(data="hello", author="alice"))
        assert result == (SEED, Memo(data="hello", author="alice"))

    def test_get_after_add(self, memo_store):
        memo = Memo(data="hello", author="alice")
        memo_store.add(memo)
        assert memo_store.get(1) == memo

    def test_add_rejects_empty_data(self, memo_store):
        with pytest.raises(InvalidMemoError, match="required"):
            memo_store.add(Memo(data="", author="x"))
        assert memo_store.count() == 1

    def test_add_rejects_empty_author(self, memo_store):
        with pytest.raises(InvalidMemoError):
            memo_store.add(Memo(data="x", author=""))
        assert memo_store.count() == 1

    def test_add_accepts_non_empty_fields(self, memo_store):
        memo_store.add(Memo(data="x", author="y"))
        assert memo_store.get(1) == Memo(data="x", author="y")


class TestMemoStoreIndexRule:
    """Every positional operation shares 0 <= index < length."""

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_get_out_of_range(self, memo_store, index):
        with pytest.raises(InvalidIndexError, match="retrieve"):
            memo_store.get(index)

    @pytest.mark.parametrize("index", [-1, 1])
    def test_update_out_of_range(self, memo_store, index):
        with pytest.raises(InvalidIndexError, match="update"):
            memo_store.update(index, MemoPatch(data="x"))

    @pytest.mark.parametrize("index", [-1, 1])
    def test_remove_out_of_range(self, memo_store, index):
        with pytest.raises(InvalidIndexError, match="remove"):
            memo_store.remove(index)
        assert memo_store.count() == 1

    def test_empty_store_has_no_valid_index(self, empty_memo_store):
        with pytest.raises(InvalidIndexError):
            empty_memo_store.get(0)
        with pytest.raises(InvalidIndexError):
            empty_memo_store.update(0, MemoPatch(data="x"))
        with pytest.raises(InvalidIndexError):
            empty_memo_store.remove(0)

    def test_error_carries_index_and_length(self, memo_store):
        with pytest.raises(InvalidIndexError) as exc_info:
            memo_store.get(3)
        assert exc_info.value.context == {"index": 3, "length": 1}


class TestMemoStoreUpdate:
    """Tests for update() merge semantics."""

    def test_update_data_keeps_author(self, memo_store):
        updated = memo_store.update(0, MemoPatch(data="changed"))
        assert updated == Memo(data="changed", author="saltyaom")
        assert memo_store.get(0) == updated

    def test_update_both_fields(self, memo_store):
        updated = memo_store.update(0, MemoPatch(data="hi", author="alice"))
        assert updated == Memo(data="hi", author="alice")

    def test_update_author_only(self, memo_store):
        updated = memo_store.update(0, MemoPatch(author="alice"))
        assert updated == Memo(data="Moonhalo", author="alice")

    def test_update_without_fields_rejected(self, memo_store):
        with pytest.raises(InvalidMemoError, match="At least one field"):
            memo_store.update(0, MemoPatch())

    def test_update_to_empty_data_rejected(self, memo_store):
        with pytest.raises(InvalidMemoError):
            memo_store.update(0, MemoPatch(data=""))
        assert memo_store.get(0) == SEED

    def test_index_checked_before_fields(self, empty_memo_store):
        with pytest.raises(InvalidIndexError):
            empty_memo_store.update(0, MemoPatch())


class TestMemoStoreRemove:
    """Tests for remove() and the index shift it causes."""

    def test_remove_shifts_later_memos_down(self, memo_store):
        memo_store.add(Memo(data="one", author="a"))
        memo_store.add(Memo(data="two", author="b"))
        original = memo_store.list_memos()

        remaining = memo_store.remove(1)

        assert len(remaining) == len(original) - 1
        assert memo_store.list_memos() == remaining
        assert remaining[0] == original[0]
        assert remaining[1] == original[2]

    def test_remove_last_memo(self, memo_store):
        assert memo_store.remove(0) == ()
        assert memo_store.count() == 0


class TestMemoStoreClear:

    def test_clear_empties_store(self, memo_store):
        memo_store.add(Memo(data="x", author="y"))
        assert memo_store.clear() == ()
        assert memo_store.list_memos() == ()
