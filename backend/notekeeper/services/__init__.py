"""
NoteKeeper Backend - Services Layer
====================================

What:  The in-memory stores that make up the core of the service.
How:   Plain classes with synchronous methods; each instance owns its state
       and guards it with its own lock. Routes reach them through FastAPI
       dependencies (see notekeeper.dependencies).

Service Inventory:
    - CredentialStore: registered identities and password hashes
    - SessionManager:  session token → identity bindings
    - MemoStore:       the shared, index-addressed memo sequence
"""

from notekeeper.services.credential_store import CredentialStore
from notekeeper.services.memo_store import MemoStore
from notekeeper.services.session_manager import SessionManager

__all__ = ["CredentialStore", "MemoStore", "SessionManager"]
