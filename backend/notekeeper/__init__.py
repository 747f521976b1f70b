"""
NoteKeeper Backend - Application Package
=========================================

What: The `notekeeper` package: a small authenticated memo board.
Who:  Imported by uvicorn (`notekeeper.main:app`), pytest, and `python -m notekeeper`.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, cookies
    ├─────────────────────────────────────┤
    │    Identity dependency (per route)  │  ← cookie → session → identity
    ├─────────────────────────────────────┤
    │   Services (in-memory stores)       │  ← credentials, sessions, memos
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← frozen pydantic values + API contracts
    └─────────────────────────────────────┘

    Nothing is persisted: every store lives in process memory and is rebuilt
    on restart.
"""

__version__ = "1.0.0"
