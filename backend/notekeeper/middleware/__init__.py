"""
NoteKeeper Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied around the route handlers.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [Rate Limit] → [GZip] → [CORS] → Route

    1. Request ID: correlation ID for the log lines and error body of this request
    2. Logging: method, path, status, duration, user (429s included)
    3. Rate Limit: rejects credential brute-forcing before any hashing
    4. GZip / CORS: FastAPI's stock middleware

Identity resolution is NOT in this chain. It is the ``require_identity``
dependency in identity.py, declared only by routes that need a signed-in user.
"""
