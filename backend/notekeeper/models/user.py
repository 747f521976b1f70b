"""
NoteKeeper Backend - Identity, Credential and Session Records
==============================================================

What:  The records held by CredentialStore and SessionManager.
How:   Frozen pydantic models; a record is replaced, never edited in place.

    Identity    public view of a registered user (what callers receive)
    Credential  the stored secret for an identity: salt + PBKDF2 hash
    Session     binding from an opaque token to a username
"""

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """A registered user. Immutable once created."""

    username: str = Field(description="Unique username")

    model_config = {"frozen": True}


class Credential(BaseModel):
    """Stored secret for one identity. Never leaves CredentialStore."""

    username: str
    salt: bytes
    password_hash: bytes

    model_config = {"frozen": True}

    def to_identity(self) -> Identity:
        return Identity(username=self.username)


class Session(BaseModel):
    """A live sign-in. Destroyed on sign-out; there is no expiry."""

    token: str
    username: str

    model_config = {"frozen": True}
