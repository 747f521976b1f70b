"""
NoteKeeper Backend - Credential Store and Session Manager Unit Tests
=====================================================================

What:  Tests for registration, password verification and session lifecycle.
How:   Plain store instances with a low PBKDF2 work factor, no HTTP.
"""

import pytest

from notekeeper.exceptions import AlreadyExistsError, AuthFailureError, UnauthenticatedError
from notekeeper.models.user import Identity


class TestCredentialStore:
    """Tests for register() and verify()."""

    def test_register_returns_identity(self, credential_store):
        identity = credential_store.register("alice", "secret123")
        assert identity == Identity(username="alice")
        assert credential_store.exists("alice")
        assert credential_store.count() == 1

    def test_register_duplicate_rejected(self, credential_store):
        credential_store.register("alice", "secret123")
        with pytest.raises(AlreadyExistsError, match="already exists"):
            credential_store.register("alice", "another-password")
        assert credential_store.count() == 1

    def test_duplicate_keeps_original_password(self, credential_store):
        credential_store.register("alice", "secret123")
        with pytest.raises(AlreadyExistsError):
            credential_store.register("alice", "another-password")
        assert credential_store.verify("alice", "secret123").username == "alice"

    def test_verify_correct_password(self, credential_store):
        credential_store.register("alice", "secret123")
        assert credential_store.verify("alice", "secret123") == Identity(username="alice")

    def test_verify_wrong_password(self, credential_store):
        credential_store.register("alice", "secret123")
        with pytest.raises(AuthFailureError):
            credential_store.verify("alice", "secret124")

    def test_verify_unknown_user(self, credential_store):
        with pytest.raises(AuthFailureError):
            credential_store.verify("bob", "secret123")

    def test_unknown_user_and_wrong_password_look_the_same(self, credential_store):
        credential_store.register("alice", "secret123")
        with pytest.raises(AuthFailureError) as unknown:
            credential_store.verify("bob", "secret123")
        with pytest.raises(AuthFailureError) as wrong:
            credential_store.verify("alice", "nope-nope")
        assert unknown.value.message == wrong.value.message

    def test_passwords_are_not_stored_in_plain_text(self, credential_store):
        credential_store.register("alice", "secret123")
        stored = credential_store._credentials["alice"]
        assert b"secret123" not in stored.password_hash
        assert len(stored.salt) == 16

    def test_same_password_gets_different_hashes(self, credential_store):
        credential_store.register("alice", "secret123")
        credential_store.register("bob", "secret123")
        assert (
            credential_store._credentials["alice"].password_hash
            != credential_store._credentials["bob"].password_hash
        )


class TestSessionManager:
    """Tests for the session lifecycle."""

    def test_create_and_resolve(self, session_manager):
        token = session_manager.create_session(Identity(username="alice"))
        assert session_manager.resolve(token) == Identity(username="alice")
        assert session_manager.active_count() == 1

    def test_tokens_are_unique(self, session_manager):
        alice = Identity(username="alice")
        tokens = {session_manager.create_session(alice) for _ in range(50)}
        assert len(tokens) == 50

    @pytest.mark.parametrize("token", [None, "", "not-a-real-token"])
    def test_resolve_rejects_missing_or_unknown(self, session_manager, token):
        with pytest.raises(UnauthenticatedError):
            session_manager.resolve(token)

    def test_end_session_invalidates_token(self, session_manager):
        token = session_manager.create_session(Identity(username="alice"))
        session_manager.end_session(token)
        with pytest.raises(UnauthenticatedError):
            session_manager.resolve(token)
        assert session_manager.active_count() == 0

    def test_end_session_twice(self, session_manager):
        token = session_manager.create_session(Identity(username="alice"))
        session_manager.end_session(token)
        with pytest.raises(UnauthenticatedError):
            session_manager.end_session(token)

    def test_end_session_without_token(self, session_manager):
        with pytest.raises(UnauthenticatedError):
            session_manager.end_session(None)

    def test_ending_one_session_keeps_others(self, session_manager):
        alice = Identity(username="alice")
        first = session_manager.create_session(alice)
        second = session_manager.create_session(alice)
        session_manager.end_session(first)
        assert session_manager.resolve(second) == alice
