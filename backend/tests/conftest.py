"""
NoteKeeper Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, so no test sees another's state):
    ├── memo_store:         MemoStore with the default seed memo
    ├── empty_memo_store:   MemoStore with no memos
    ├── credential_store:   CredentialStore with a cheap hash work factor
    ├── session_manager:    SessionManager with no sessions
    ├── app:                create_app() wired to the three stores above
    ├── test_client:        HTTPX AsyncClient talking to `app`
    └── signed_in_client:   test_client after alice has signed up and in
"""

import os

# Override settings for testing BEFORE any notekeeper imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["SESSION_COOKIE_SECURE"] = "false"
os.environ["ENVIRONMENT"] = "development"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from notekeeper.main import create_app
from notekeeper.services import CredentialStore, MemoStore, SessionManager


ALICE = {"username": "alice", "password": "secret123"}


@pytest.fixture
def memo_store():
    return MemoStore()


@pytest.fixture
def empty_memo_store():
    return MemoStore(initial=[])


@pytest.fixture
def credential_store():
    return CredentialStore(iterations=1000)


@pytest.fixture
def session_manager():
    return SessionManager()


@pytest.fixture
def app(memo_store, credential_store, session_manager):
    """A fresh application owning the function-scoped stores."""
    return create_app(
        memo_store=memo_store,
        credential_store=credential_store,
        session_manager=session_manager,
    )


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client routed straight into the ASGI app.

    Cookies set by the app (the session cookie) are kept in the client's
    jar and sent on later requests, like a browser would.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def signed_in_client(test_client):
    """test_client with alice registered and holding a live session cookie."""
    response = await test_client.put("/user/sign-up", json=ALICE)
    assert response.status_code == 200
    response = await test_client.post("/user/sign-in", json=ALICE)
    assert response.status_code == 200
    return test_client
