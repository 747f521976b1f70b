"""
NoteKeeper Backend - API Routes Package
========================================

Route Inventory:
    - user.py:    PUT /user/sign-up, POST /user/sign-in,
                  GET /user/sign-out, GET /user/profile
    - memo.py:    GET|PUT /note/, GET|PATCH|DELETE /note/{index}
    - health.py:  GET /health

Routes stay thin: they pull data out of the request, resolve the caller's
identity where needed, call a store, and shape the response. Store errors
propagate to the global handlers in main.py.
"""
