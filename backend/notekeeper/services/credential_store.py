"""
NoteKeeper Backend - Credential Store
======================================

What:  Registered identities and their password hashes.
How:   A dict of username → Credential. Passwords are hashed with
       PBKDF2-HMAC-SHA256 and a random per-user salt; verification compares
       digests in constant time.
Who:   Consulted only by the sign-up and sign-in routes.
When:  Built once in create_app(); contents are lost on restart.

There is no update or delete operation: an identity exists from
registration until the process exits.
"""

import hashlib
import hmac
import logging
import secrets
import threading
from typing import Dict, Optional

from notekeeper.config import settings
from notekeeper.exceptions import AlreadyExistsError, AuthFailureError
from notekeeper.models.user import Credential, Identity

logger = logging.getLogger(__name__)

SALT_BYTES = 16


class CredentialStore:
    """
    In-memory username → credential registry.

    Hashing is CPU-bound; the routes call register() and verify() through
    Starlette's threadpool, so the dict is guarded by a lock.
    """

    def __init__(self, iterations: Optional[int] = None):
        self.iterations = iterations or settings.password_hash_iterations
        self._credentials: Dict[str, Credential] = {}
        self._lock = threading.Lock()
        # Digest compared against when the username is unknown, so that a
        # miss costs the same as a wrong password.
        self._dummy_salt = secrets.token_bytes(SALT_BYTES)

    def _hash(self, password: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, self.iterations)

    def register(self, username: str, password: str) -> Identity:
        """
        Register a new identity.

        Raises:
            AlreadyExistsError: username is already registered.
        """
        salt = secrets.token_bytes(SALT_BYTES)
        password_hash = self._hash(password, salt)
        with self._lock:
            if username in self._credentials:
                raise AlreadyExistsError(username=username)
            credential = Credential(username=username, salt=salt, password_hash=password_hash)
            self._credentials[username] = credential
        logger.info("Registered user %s", username)
        return credential.to_identity()

    def verify(self, username: str, password: str) -> Identity:
        """
        Check a username/password pair.

        Raises:
            AuthFailureError: unknown username or wrong password.
        """
        with self._lock:
            credential = self._credentials.get(username)

        if credential is None:
            self._hash(password, self._dummy_salt)
            logger.info("Sign-in rejected for unknown user %s", username)
            raise AuthFailureError(context={"username": username})

        candidate = self._hash(password, credential.salt)
        if not hmac.compare_digest(candidate, credential.password_hash):
            logger.info("Sign-in rejected for %s: wrong password", username)
            raise AuthFailureError(context={"username": username})

        return credential.to_identity()

    def exists(self, username: str) -> bool:
        with self._lock:
            return username in self._credentials

    def count(self) -> int:
        with self._lock:
            return len(self._credentials)
